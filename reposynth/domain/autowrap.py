"""
Auto-wrap policy for reposynth.

Older workspaces built a single Project with no parent. Now that the
Repository sits above every Project, those trees are wrapped on the fly:
when a chain of nodes has no Repository at its top, a default Repository
is created and the chain's top node is attached beneath it. The implicit
repository is an ordinary Repository in every respect.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union, TYPE_CHECKING

from ..errors import RepositoryNotFoundError

if TYPE_CHECKING:
    from pathlib import Path
    from .node import Node
    from .repository import Repository

logger = logging.getLogger(__name__)


class WrapState(Enum):
    """Whether a node chain already has a repository at its top."""
    NO_REPOSITORY_YET = "no_repository_yet"
    REPOSITORY_ESTABLISHED = "repository_established"


def find_repository(node: 'Node') -> Optional['Repository']:
    """Nearest Repository at or above node, or None. Does not use the cache."""
    from .repository import Repository

    current: Optional['Node'] = node
    while current is not None:
        if isinstance(current, Repository):
            return current
        current = current.parent
    return None


@dataclass
class AutoWrapPolicy:
    """
    Decides what happens when a node has no repository ancestor.

    Attributes:
        enabled: Create a default repository when none exists. When False,
            lookups fail with RepositoryNotFoundError instead.
        platform: Platform variant of the implicit repository.
        platform_options: Options passed to that variant.
    """
    enabled: bool = True
    platform: str = "github"
    platform_options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'AutoWrapPolicy':
        """Policy from the ``auto_wrap`` config section. Raises ConfigError for an unknown platform."""
        from .platform import Platform

        section = config.get('auto_wrap') or {}
        return cls(
            enabled=bool(section.get('enabled', True)),
            platform=Platform.parse(section.get('platform', 'github')).value,
            platform_options=dict(section.get('platform_options') or {}),
        )

    def state(self, node: 'Node') -> WrapState:
        if find_repository(node) is None:
            return WrapState.NO_REPOSITORY_YET
        return WrapState.REPOSITORY_ESTABLISHED

    def ensure_repository(
        self,
        node: 'Node',
        outdir: Optional[Union[str, 'Path']] = None,
    ) -> 'Repository':
        """
        Return the repository above node, creating one if needed.

        Args:
            node: Any node; its chain is walked to the top.
            outdir: Output directory for an implicit repository
                (defaults to the current directory).

        Returns:
            The existing or newly created Repository.

        Raises:
            RepositoryNotFoundError: No repository exists and the policy
                is disabled.
        """
        from .repository import Repository

        existing = find_repository(node)
        if existing is not None:
            return existing
        if not self.enabled:
            raise RepositoryNotFoundError(node.path)

        top = node.root
        repository = Repository(
            outdir if outdir is not None else '.',
            platform=self.platform,
            platform_options=dict(self.platform_options),
        )
        top._attach(repository)
        logger.debug(f"Auto-wrapped '{top.id}' in implicit {self.platform} repository at {repository.outdir}")
        return repository


_default_policy = AutoWrapPolicy()


def get_default_policy() -> AutoWrapPolicy:
    return _default_policy


def set_default_policy(policy: AutoWrapPolicy) -> AutoWrapPolicy:
    """Replace the process-wide policy. Returns the previous one."""
    global _default_policy
    previous = _default_policy
    _default_policy = policy
    return previous
