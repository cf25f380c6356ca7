"""
Synthesis orchestrator for reposynth.

Drives every component in a repository's tree through three global
phases, in order:

    pre_synthesize   preorder  (repository components, then units depth-first)
    synthesize       preorder
    post_synthesize  postorder (deepest units first, repository last)

Each phase finishes for the whole tree before the next one starts. The
first hook that raises stops the run: no later hook runs in that phase or
any later phase. Files already written stay on disk.
"""

import logging
from typing import Callable, Iterator, TYPE_CHECKING

from ..domain.node import Node
from ..domain.operation import SynthesisSummary
from ..errors import StructuralError, SynthesisError

if TYPE_CHECKING:
    from ..domain.repository import Repository

logger = logging.getLogger(__name__)

PRE_SYNTHESIZE = 'pre_synthesize'
SYNTHESIZE = 'synthesize'
POST_SYNTHESIZE = 'post_synthesize'

PHASES = (PRE_SYNTHESIZE, SYNTHESIZE, POST_SYNTHESIZE)

# Traversal used for each phase
PHASE_ORDER = {
    PRE_SYNTHESIZE: Node.preorder,
    SYNTHESIZE: Node.preorder,
    POST_SYNTHESIZE: Node.postorder,
}


class SynthesisOrchestrator:
    """
    Runs the synthesis lifecycle over one repository, once.

    Example:
        orchestrator = SynthesisOrchestrator(repo)
        summary = orchestrator.run()
        print(f"Wrote {summary.successful} files")
    """

    def __init__(self, repository: 'Repository'):
        self.repository = repository

    def schedule(self, phase: str) -> Iterator[Node]:
        """Nodes in the order their hooks run for phase."""
        order: Callable[[Node], Iterator[Node]] = PHASE_ORDER[phase]
        return order(self.repository)

    def run(self) -> SynthesisSummary:
        """
        Freeze the tree and run all three phases.

        Returns:
            SynthesisSummary, also stored on ``repository.last_result``

        Raises:
            StructuralError: The repository was already synthesized
            SynthesisError: A hook failed; names the node path and phase
        """
        repository = self.repository
        if repository._frozen:
            raise StructuralError(f"'{repository.path}' has already been synthesized")
        repository._frozen = True

        summary = SynthesisSummary(repository=str(repository.outdir), dry_run=repository.dry_run)
        repository.last_result = summary

        for phase in PHASES:
            summary.phase = phase
            logger.debug(f"Starting {phase}")
            self._run_phase(phase, summary)

        logger.debug(
            f"Synthesis finished: {summary.successful} written, {summary.skipped} skipped"
        )
        return summary

    def _run_phase(self, phase: str, summary: SynthesisSummary) -> None:
        for node in self.schedule(phase):
            for component in node.components:
                hook = getattr(component, phase, None)
                if hook is None:
                    continue
                try:
                    hook()
                except Exception as e:
                    logger.error(f"{phase} failed at {node.path}: {e}")
                    summary.add_error(f"{node.path}: {phase}: {e}")
                    raise SynthesisError(node.path, phase, e) from e
