"""
GitHub Actions workflows for the GitHub platform variant.

Workflow bodies are passed through as mappings; reposynth only decides
where each workflow file lives and who owns it.
"""

import logging
import re
from typing import Any, Dict, Optional, TYPE_CHECKING

from ..domain.autowrap import find_repository
from ..domain.component import Component
from ..errors import ConfigError, StructuralError
from .files import YamlFile

if TYPE_CHECKING:
    from ..domain.node import Node

logger = logging.getLogger(__name__)

WORKFLOWS_DIR = '.github/workflows'
WORKFLOW_NAME = re.compile(r'^[A-Za-z0-9][A-Za-z0-9_.-]*$')


class GitHubWorkflows(Component):
    """
    CI engine for GitHub: one YAML file per workflow.

    Example:
        gh = Repository.of(project).github
        if gh and gh.workflows:
            gh.workflows.add_workflow("build", {"on": ["push"], "jobs": {...}},
                                      owner=project)
    """

    def __init__(self, node: 'Node'):
        super().__init__(node)
        self.workflows: Dict[str, YamlFile] = {}

    def add_workflow(
        self,
        name: str,
        definition: Any,
        owner: Optional['Node'] = None,
    ) -> YamlFile:
        """
        Add ``.github/workflows/<name>.yml``.

        Args:
            name: Workflow file name without extension
            definition: Workflow mapping, or a callable returning one at synth time
            owner: Node that owns the file (defaults to the repository)

        Raises:
            ConfigError: Invalid workflow name or definition
            StructuralError: owner is in another repository's tree
            OutputCollisionError: A workflow with that name already exists
        """
        if not isinstance(name, str) or not WORKFLOW_NAME.match(name):
            raise ConfigError(f"Invalid workflow name '{name}'")
        if not (callable(definition) or isinstance(definition, dict)):
            raise ConfigError(
                f"Workflow '{name}' must be a mapping, got {type(definition).__name__}"
            )
        repository = self.repository
        if owner is not None and find_repository(owner) is not repository:
            raise StructuralError(
                f"Workflow owner '{owner.path}' belongs to a different repository than '{repository.path}'"
            )
        workflow = YamlFile(
            owner or self.node,
            f"{WORKFLOWS_DIR}/{name}.yml",
            definition,
            base=repository.outdir,
        )
        self.workflows[name] = workflow
        logger.debug(f"Added workflow {name} owned by {(owner or self.node).path}")
        return workflow
