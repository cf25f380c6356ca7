"""
Component base class.

A Component is a behavior unit bound to exactly one Node. During
synthesis the orchestrator calls its hooks in three global phases:

    pre_synthesize()   - repository components first, then units depth-first
    synthesize()       - depth-first over the whole tree
    post_synthesize()  - deepest units first, repository components last

Hooks may read the tree but never change its structure; the tree is
frozen while they run.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import Node
    from .repository import Repository


class Component:
    """Attachable behavior unit with optional lifecycle hooks."""

    def __init__(self, node: 'Node'):
        self.node = node
        node._add_component(self)

    @property
    def repository(self) -> 'Repository':
        """Nearest repository of the owning node."""
        from .repository import Repository
        return Repository.of(self.node)

    def pre_synthesize(self) -> None:
        pass

    def synthesize(self) -> None:
        pass

    def post_synthesize(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(node={self.node.path!r})"
