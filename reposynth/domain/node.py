"""
Construct tree nodes for reposynth.

A Node has an id that is unique among its siblings, at most one parent,
and an ordered list of children. Nodes attach to their parent when they
are constructed and can never be detached or moved. Once synthesis starts
the whole tree is frozen and any further attach raises StructuralError.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, TYPE_CHECKING

from ..errors import StructuralError

if TYPE_CHECKING:
    from .component import Component
    from .repository import Repository

logger = logging.getLogger(__name__)

PATH_SEPARATOR = '/'


class Node:
    """
    Base element of the construct tree.

    Example:
        repo = Repository("/tmp/ws")
        group = Node("packages", repo)
        Project("api", group)

        [n.path for n in repo.preorder()]
        # ['root', 'root/packages', 'root/packages/api']
    """

    # Set by Repository: such nodes may only ever be tree roots.
    root_only = False

    def __init__(self, id: str, parent: Optional['Node'] = None):
        if not isinstance(id, str) or not id or PATH_SEPARATOR in id:
            raise StructuralError(
                f"Invalid node id {id!r}: must be a non-empty string without '{PATH_SEPARATOR}'"
            )
        self.id = id
        self.parent: Optional[Node] = None
        self._children: List[Node] = []
        self._components: List['Component'] = []
        self._repository: Optional['Repository'] = None  # ancestor cache
        self._frozen = False
        if parent is not None:
            self._attach(parent)

    def _attach(self, parent: 'Node') -> None:
        """Attach this node as the last child of parent. Irreversible."""
        if self.parent is not None:
            raise StructuralError(
                f"'{self.path}' is already attached and cannot be moved under '{parent.path}'"
            )
        if self.root_only:
            raise StructuralError(
                f"'{self.id}' is a repository and cannot be attached under '{parent.path}'"
            )
        ancestor: Optional[Node] = parent
        while ancestor is not None:
            if ancestor is self:
                raise StructuralError(
                    f"Attaching '{self.path}' under '{parent.path}' would create a cycle"
                )
            ancestor = ancestor.parent
        parent._check_mutable()
        if any(child.id == self.id for child in parent._children):
            raise StructuralError(
                f"Duplicate id '{self.id}' under '{parent.path}'"
            )
        parent._children.append(self)
        self.parent = parent
        logger.debug(f"Attached {self.path}")

    def _check_mutable(self) -> None:
        if self.root._frozen:
            raise StructuralError(
                f"Cannot modify '{self.path}': synthesis has already started"
            )

    def _add_component(self, component: 'Component') -> None:
        self._check_mutable()
        self._components.append(component)

    @property
    def root(self) -> 'Node':
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def path(self) -> str:
        """Ids from the root down to this node, joined by '/'."""
        ids = []
        node: Optional[Node] = self
        while node is not None:
            ids.append(node.id)
            node = node.parent
        return PATH_SEPARATOR.join(reversed(ids))

    @property
    def children(self) -> Tuple['Node', ...]:
        return tuple(self._children)

    @property
    def components(self) -> Tuple['Component', ...]:
        return tuple(self._components)

    @property
    def frozen(self) -> bool:
        return self.root._frozen

    @property
    def outdir(self) -> Path:
        """Directory this node's files are written relative to."""
        if self.parent is None:
            return Path('.').resolve()
        return self.parent.outdir

    def find_child(self, id: str) -> Optional['Node']:
        for child in self._children:
            if child.id == id:
                return child
        return None

    def preorder(self) -> Iterator['Node']:
        """Yield this node, then each child subtree in attachment order."""
        yield self
        for child in self._children:
            yield from child.preorder()

    def postorder(self) -> Iterator['Node']:
        """Yield each child subtree in attachment order, then this node."""
        for child in self._children:
            yield from child.postorder()
        yield self

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path!r})"
