"""
Service layer for reposynth.

Services operate on the domain layer:
- SynthesisOrchestrator: runs the three synthesis phases over a tree
- build_workspace: builds a construct tree from configuration
"""

from .synthesis_service import SynthesisOrchestrator, PHASES
from .workspace_service import build_workspace

__all__ = [
    'SynthesisOrchestrator',
    'PHASES',
    'build_workspace',
]
