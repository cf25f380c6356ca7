"""
Handles the 'tree' command: show the construct tree without synthesizing.
"""

import json
import click

from ..cli_utils import add_common_options, load_workspace_config, standard_command
from ..render import iter_node_records, render_tree
from ..services.workspace_service import build_workspace


@click.command(name='tree')
@add_common_options('config', 'json', 'debug')
@standard_command
def tree_handler(config_path, output_json, debug):
    """Show the construct tree of the workspace.

    \b
    Examples:
        reposynth tree
        reposynth tree --json | jq .path
    """
    config, base_dir = load_workspace_config(config_path, debug=debug)
    repository = build_workspace(config, base_dir=base_dir)

    if output_json:
        for record in iter_node_records(repository):
            print(json.dumps(record, ensure_ascii=False), flush=True)
    else:
        render_tree(repository)
