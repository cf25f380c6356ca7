"""
Handles the 'synth' command: build the workspace tree and synthesize it.

Output:
- Default: one line per file on stdout
- --json: JSONL, one object per file followed by a summary object
- --pretty: rich table
"""

import json
import click

from ..domain.operation import OperationStatus
from ..cli_utils import add_common_options, load_workspace_config, standard_command
from ..render import render_summary
from ..services.workspace_service import build_workspace


@click.command(name='synth')
@click.option('--pretty', is_flag=True, help='Display with rich formatting')
@add_common_options('config', 'dry_run', 'json', 'debug')
@standard_command
def synth_handler(pretty, config_path, dry_run, output_json, debug):
    """Synthesize the workspace into files.

    Builds the construct tree from the workspace config, then runs
    pre_synthesize, synthesize and post_synthesize over it. The first
    failing component stops the run; files written before it stay on disk.

    \b
    Examples:
        reposynth synth                      # Uses ./.reposynth.yaml
        reposynth synth -c workspace.yaml    # Explicit config
        reposynth synth --dry-run --pretty   # Preview as a table
        reposynth synth --json               # JSONL for scripting
    """
    config, base_dir = load_workspace_config(config_path, debug=debug)
    repository = build_workspace(config, base_dir=base_dir, dry_run=True if dry_run else None)

    repository.synth()
    summary = repository.last_result

    if output_json:
        for detail in summary.details:
            print(json.dumps(detail.to_dict(), ensure_ascii=False), flush=True)
        print(summary.to_jsonl(), flush=True)
    elif pretty:
        render_summary(summary, repository)
    else:
        verb = "Would write" if summary.dry_run else "Wrote"
        for detail in summary.details:
            if detail.status == OperationStatus.SKIPPED:
                continue
            click.echo(f"{verb} {repository.relative_path(detail.file_path)}")
        click.echo(f"{summary.successful} files, {summary.skipped} skipped")
