"""
GitLab CI pipeline for the GitLab platform variant.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from ..domain.autowrap import find_repository
from ..errors import ConfigError, StructuralError
from .files import YamlFile

if TYPE_CHECKING:
    from ..domain.node import Node

logger = logging.getLogger(__name__)

# Top-level keywords that are not job names
RESERVED_KEYS = {
    'default', 'include', 'stages', 'variables', 'workflow',
    'image', 'services', 'cache', 'before_script', 'after_script',
}


class GitLabPipeline(YamlFile):
    """
    CI engine for GitLab: a single ``.gitlab-ci.yml`` with stages and jobs.

    Jobs can be added by any project; each job's ``stage`` must be one of
    the pipeline stages.
    """

    file_type = "gitlab-ci"

    def __init__(self, node: 'Node', stages: Optional[Iterable[str]] = None):
        super().__init__(node, '.gitlab-ci.yml', self._document)
        self.stages: List[str] = list(stages or [])
        self.jobs: Dict[str, Dict[str, Any]] = {}
        self.job_owners: Dict[str, str] = {}

    def add_stage(self, stage: str) -> None:
        if stage not in self.stages:
            self.stages.append(stage)

    def add_job(self, name: str, definition: Dict[str, Any], owner: Optional['Node'] = None) -> None:
        """
        Add a job to the pipeline.

        Raises:
            ConfigError: Reserved or duplicate job name, a definition that
                is not a mapping, or unknown stage
            StructuralError: owner is in another repository's tree
        """
        if name in RESERVED_KEYS:
            raise ConfigError(f"'{name}' is a reserved GitLab CI keyword, not a job name")
        if not isinstance(definition, dict):
            raise ConfigError(
                f"GitLab job '{name}' must be a mapping, got {type(definition).__name__}"
            )
        if owner is not None and find_repository(owner) is not self.repository:
            raise StructuralError(
                f"GitLab job owner '{owner.path}' belongs to a different repository than '{self.node.path}'"
            )
        owner_path = (owner or self.node).path
        if name in self.jobs:
            raise ConfigError(
                f"GitLab job '{name}' is defined by both '{self.job_owners[name]}' and '{owner_path}'"
            )
        stage = definition.get('stage')
        if stage is not None and stage not in self.stages:
            raise ConfigError(
                f"GitLab job '{name}' uses unknown stage '{stage}'. Stages: {', '.join(self.stages)}"
            )
        self.jobs[name] = dict(definition)
        self.job_owners[name] = owner_path
        logger.debug(f"Added GitLab job {name} owned by {owner_path}")

    def _document(self) -> Optional[Dict[str, Any]]:
        if not self.jobs:
            return None
        document: Dict[str, Any] = {'stages': list(self.stages)}
        document.update(self.jobs)
        return document
