"""
CODEOWNERS aggregation for reposynth.

The file is written in ``post_synthesize`` so it reflects every project
in the repository, after all of them have synthesized.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union, TYPE_CHECKING

from .files import GENERATED_MARKER, FileComponent

if TYPE_CHECKING:
    from ..domain.node import Node

logger = logging.getLogger(__name__)


class Codeowners(FileComponent):
    """
    Ownership file built from explicit rules plus each project's owners.

    Example:
        repo.git.codeowners.add_rule("*", "@org/maintainers")
        Project("api", repo, owners=["@org/api"])
        # CODEOWNERS:
        #   *       @org/maintainers
        #   /api/   @org/api
    """

    file_type = "codeowners"

    def __init__(self, node: 'Node', path: Union[str, Path] = 'CODEOWNERS'):
        super().__init__(node, path)
        self.rules: List[Tuple[str, List[str]]] = []

    def add_rule(self, pattern: str, *owners: str) -> None:
        if not owners:
            raise ValueError(f"CODEOWNERS rule '{pattern}' needs at least one owner")
        self.rules.append((pattern, list(owners)))

    def project_rules(self) -> List[Tuple[str, List[str]]]:
        repository = self.repository
        rules = []
        for project in repository.projects:
            if not project.owners:
                continue
            try:
                relative = project.outdir.relative_to(repository.outdir)
            except ValueError:
                logger.warning(
                    f"Skipping owners of {project.path}: {project.outdir} is outside {repository.outdir}"
                )
                continue
            pattern = '*' if relative == Path('.') else f"/{relative.as_posix()}/"
            rules.append((pattern, project.owners))
        return rules

    def render(self) -> Optional[str]:
        rules = self.rules + self.project_rules()
        if not rules:
            return None
        width = max(len(pattern) for pattern, _ in rules)
        lines = [f"# {GENERATED_MARKER}", ""]
        lines.extend(f"{pattern.ljust(width)}  {' '.join(owners)}" for pattern, owners in rules)
        return "\n".join(lines) + "\n"

    def synthesize(self) -> None:
        pass  # written in post_synthesize

    def post_synthesize(self) -> None:
        self.write()
