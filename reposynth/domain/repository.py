"""
Repository domain object for reposynth.

A Repository is the root of a construct tree and represents the whole
source-controlled workspace. It owns the workspace-wide components
composed by its platform variant, keeps track of which node owns each
output file, and drives synthesis of the tree.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union, TYPE_CHECKING

from ..errors import OutputCollisionError
from .autowrap import AutoWrapPolicy, find_repository, get_default_policy
from .node import Node
from .operation import SynthesisSummary
from .platform import Git, GitHub, GitLab, Platform, PlatformVariant, create_variant

if TYPE_CHECKING:
    from .project import Project

logger = logging.getLogger(__name__)


class Repository(Node):
    """
    Root node of a construct tree.

    Example:
        repo = Repository("/path/to/workspace", platform="gitlab")
        api = Project("api", repo)
        web = Project("web", repo)

        Repository.of(api) is repo      # True
        repo.projects                    # [api, web]
        repo.gitlab.pipeline.add_job(...)
        repo.synth()
    """

    root_only = True

    def __init__(
        self,
        outdir: Union[str, Path] = '.',
        *,
        id: str = 'root',
        platform: Union[str, Platform] = Platform.GITHUB,
        platform_options: Optional[Any] = None,
        dry_run: bool = False,
    ):
        super().__init__(id)
        self._outdir = Path(outdir).expanduser().resolve()
        self.dry_run = dry_run
        self.last_result: Optional[SynthesisSummary] = None
        self._outputs: Dict[Path, Node] = {}
        self.variant: PlatformVariant = create_variant(platform, self, platform_options)

    @classmethod
    def of(cls, node: Node, policy: Optional[AutoWrapPolicy] = None) -> 'Repository':
        """
        Find the nearest repository at or above node.

        The result is cached on node, so later calls return the same
        object without walking the tree again. When the chain has no
        repository the auto-wrap policy decides: either a default
        repository is created above it, or RepositoryNotFoundError is
        raised.

        Args:
            node: Any node in a construct tree
            policy: Auto-wrap policy (defaults to the process-wide one)

        Returns:
            The nearest Repository
        """
        cached = node._repository
        if cached is not None:
            return cached

        repository = find_repository(node)
        if repository is None:
            repository = (policy or get_default_policy()).ensure_repository(node)
        logger.debug(f"Resolved repository of {node.path}: {repository.path}")
        node._repository = repository
        return repository

    @property
    def outdir(self) -> Path:
        return self._outdir

    @property
    def platform(self) -> Platform:
        return self.variant.platform

    @property
    def git(self) -> Optional[Git]:
        """The variant when it is Git-based (Git, GitHub or GitLab), else None."""
        return self.variant if isinstance(self.variant, Git) else None

    @property
    def github(self) -> Optional[GitHub]:
        return self.variant if isinstance(self.variant, GitHub) else None

    @property
    def gitlab(self) -> Optional[GitLab]:
        return self.variant if isinstance(self.variant, GitLab) else None

    @property
    def projects(self) -> List['Project']:
        """Projects below this repository, in preorder."""
        return list(self._iter_projects(self))

    def _iter_projects(self, node: Node) -> Iterator['Project']:
        from .project import Project

        for child in node.children:
            if isinstance(child, Repository):
                continue
            if isinstance(child, Project):
                yield child
            yield from self._iter_projects(child)

    @property
    def outputs(self) -> Dict[Path, Node]:
        """Claimed output paths and the node that owns each."""
        return dict(self._outputs)

    def claim_output(self, path: Union[str, Path], owner: Node) -> Path:
        """
        Register owner as the only writer of path.

        Raises:
            OutputCollisionError: Another node already claimed the path
            StructuralError: Synthesis has already started
        """
        self._check_mutable()
        resolved = Path(path).resolve()
        existing = self._outputs.get(resolved)
        if existing is not None:
            raise OutputCollisionError(str(resolved), existing.path, owner.path)
        self._outputs[resolved] = owner
        return resolved

    def relative_path(self, path: Union[str, Path]) -> str:
        """Path relative to the repository outdir when it lies below it."""
        try:
            return Path(path).relative_to(self._outdir).as_posix()
        except ValueError:
            return str(path)

    def synth(self) -> None:
        """
        Run pre_synthesize, synthesize and post_synthesize over the tree.

        Raises:
            SynthesisError: A component hook failed
            StructuralError: This repository was already synthesized
        """
        from ..services.synthesis_service import SynthesisOrchestrator
        SynthesisOrchestrator(self).run()
