"""
Rendering functions for reposynth output.

This module handles all pretty-printing and table formatting.
Core functions return data, this module makes it human-readable.
"""

from typing import Any, Dict, Iterator, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from .domain.node import Node
from .domain.operation import OperationStatus, SynthesisSummary
from .domain.project import Project
from .domain.repository import Repository

console = Console()

STATUS_STYLES = {
    OperationStatus.SUCCESS: "green",
    OperationStatus.DRY_RUN: "cyan",
    OperationStatus.SKIPPED: "yellow",
    OperationStatus.FAILED: "red",
}


def node_label(node: Node) -> str:
    """One-line description of a node for tree output."""
    if isinstance(node, Repository):
        label = f"[bold]{node.id}[/bold] [dim]({node.platform.value})[/dim] {node.outdir}"
    elif isinstance(node, Project):
        label = f"[cyan]{node.id}[/cyan] [dim]{node.outdir}[/dim]"
    else:
        label = node.id
    if node.components:
        names = ", ".join(type(c).__name__ for c in node.components)
        label += f" [dim]\\[{names}][/dim]"
    return label


def build_tree(node: Node, tree: Optional[Tree] = None) -> Tree:
    """Build a rich Tree mirroring the construct tree below node."""
    branch = Tree(node_label(node)) if tree is None else tree.add(node_label(node))
    for child in node.children:
        build_tree(child, branch)
    return branch


def render_tree(repository: Repository) -> None:
    console.print(build_tree(repository))


def iter_node_records(repository: Repository) -> Iterator[Dict[str, Any]]:
    """Flat node records for JSONL output, in preorder."""
    for node in repository.preorder():
        record: Dict[str, Any] = {
            'path': node.path,
            'id': node.id,
            'kind': type(node).__name__,
            'outdir': str(node.outdir),
            'components': [type(c).__name__ for c in node.components],
        }
        if isinstance(node, Repository):
            record['platform'] = node.platform.value
        if isinstance(node, Project) and node.owners:
            record['owners'] = list(node.owners)
        yield record


def render_summary(summary: SynthesisSummary, repository: Optional[Repository] = None) -> None:
    """
    Render a synth summary as a pretty table.

    Args:
        summary: Result of Repository.synth()
        repository: Used to show paths relative to the workspace
    """
    if not summary.details:
        console.print("[yellow]No files generated.[/yellow]")
        return

    title = "Synthesis (dry run)" if summary.dry_run else "Synthesis"
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("File", style="cyan")
    table.add_column("Node", style="dim")
    table.add_column("Type")
    table.add_column("Status")

    for detail in summary.details:
        path = repository.relative_path(detail.file_path) if repository else detail.file_path
        style = STATUS_STYLES.get(detail.status, "white")
        table.add_row(path, detail.node_path, detail.file_type, f"[{style}]{detail.status.value}[/{style}]")

    console.print(table)
    console.print(
        f"[bold]{summary.successful}[/bold] generated, "
        f"[yellow]{summary.skipped}[/yellow] skipped, "
        f"[red]{summary.failed}[/red] failed"
    )
