"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import logging
import sys
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from .config import configure_logging, get_config_path, load_config
from .domain.autowrap import AutoWrapPolicy, set_default_policy
from .errors import ReposynthError
from .exit_codes import INTERRUPTED, CommandError, get_exit_code_for_exception

logger = logging.getLogger(__name__)


def standard_command(func):
    """
    Decorator that provides standard CLI error handling:
    - ReposynthError and CommandError map to their exit codes
    - With --json the error is printed as a JSON object on stdout,
      otherwise as a message on stderr
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        output_json = kwargs.get('output_json', False)
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo("Interrupted by user", err=True)
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except (ReposynthError, CommandError) as e:
            exit_code = get_exit_code_for_exception(e)
            if output_json:
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__,
                    "exit_code": exit_code,
                }
                for attr in ('node_path', 'phase', 'path'):
                    if getattr(e, attr, None):
                        error_obj[attr] = str(getattr(e, attr))
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            else:
                click.echo(f"Error: {e}", err=True)
            sys.exit(exit_code)

    return wrapper


def load_workspace_config(config_path: Optional[str], debug: bool = False) -> Tuple[Dict[str, Any], Path]:
    """
    Load config for a command, configure logging and install the
    auto-wrap policy from the ``auto_wrap`` section.

    Returns:
        (config, base_dir) where base_dir is the directory relative
        outdirs are resolved against: the config file's directory, or the
        current directory when no file exists.
    """
    config = load_config(config_path)
    configure_logging(config, debug=debug)
    set_default_policy(AutoWrapPolicy.from_config(config))
    path = Path(config_path).expanduser() if config_path else get_config_path()
    base_dir = path.resolve().parent if path.exists() else Path.cwd()
    logger.debug(f"Workspace base directory: {base_dir}")
    return config, base_dir


# Standard options that many commands share
common_options = {
    'config': click.option('--config', '-c', 'config_path', type=click.Path(dir_okay=False),
                           help='Workspace config file (default: .reposynth.yaml or REPOSYNTH_CONFIG)'),
    'json': click.option('--json', 'output_json', is_flag=True, help='Output as JSONL'),
    'debug': click.option('--debug', is_flag=True, help='Enable debug logging'),
    'dry_run': click.option('--dry-run', is_flag=True, help='Render files without writing them'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('config', 'json')
        def my_command(config_path, output_json):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
