import click
import json
from pathlib import Path

from reposynth.cli_utils import standard_command
from reposynth.config import CONFIG_FILENAMES, get_config_path, get_example_config, load_config, save_config
from reposynth.exit_codes import CommandError, USAGE_ERROR

@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass

@config_cmd.command("init")
@click.option("--path", "config_path", type=click.Path(dir_okay=False), default=None,
              help=f"Where to write the config (default: ./{CONFIG_FILENAMES[0]})")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@standard_command
def init_config(config_path, force):
    """Write a starter workspace configuration."""
    path = Path(config_path) if config_path else Path.cwd() / CONFIG_FILENAMES[0]
    if path.exists() and not force:
        raise CommandError(f"{path} already exists, use --force to overwrite", USAGE_ERROR)
    save_config(get_example_config(), path)
    click.echo(f"Workspace configuration written to {path}")

@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
@click.option("--path", is_flag=True, help="Show the config file path being used")
@standard_command
def show_config(pretty, path):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON (JSONL format).
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    """
    if path:
        config_path = get_config_path()
        print(json.dumps({"config_path": str(config_path), "exists": config_path.exists()}))
        return

    config = load_config()

    if pretty:
        # Pretty print for human readability
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        # Default: single-line JSON (JSONL)
        print(json.dumps(config, ensure_ascii=False))
