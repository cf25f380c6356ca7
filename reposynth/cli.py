#!/usr/bin/env python3

import click

from reposynth.commands.config import config_cmd
from reposynth.commands.synth import synth_handler
from reposynth.commands.tree import tree_handler


@click.group()
@click.version_option(package_name='reposynth')
def cli():
    """reposynth - Synthesize configuration files for a workspace.

    Models the workspace as a tree: one repository with projects below it.
    Each node carries components that write files when the tree is
    synthesized.
    """
    pass


cli.add_command(synth_handler, name='synth')
cli.add_command(tree_handler, name='tree')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
