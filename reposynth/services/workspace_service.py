"""
Workspace builder for reposynth.

Turns a configuration mapping (see config.py) into a construct tree:

    repository:
      platform: gitlab
      platform_options: {stages: [build, test]}
    projects:
      - id: api
        owners: ["@org/api"]
        files: {README.md: "# api"}
        jobs: {api-test: {stage: test, script: [make test]}}
        projects:
          - id: client      # nested unit, outdir api/client

Platform-specific keys (``workflows`` for GitHub, ``jobs`` for GitLab)
are checked against the repository's concrete variant.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..components.gitignore import IgnoreFile
from ..domain.node import Node
from ..domain.project import Project
from ..domain.repository import Repository
from ..errors import ConfigError

logger = logging.getLogger(__name__)

PROJECT_KEYS = {'id', 'outdir', 'owners', 'files', 'ignore', 'workflows', 'jobs', 'projects'}


def build_workspace(
    config: Dict[str, Any],
    base_dir: Optional[Union[str, Path]] = None,
    dry_run: Optional[bool] = None,
) -> Repository:
    """
    Build a Repository and its projects from configuration.

    Args:
        config: Loaded configuration (load_config())
        base_dir: Directory relative outdirs are resolved against
            (defaults to the current directory)
        dry_run: Override ``repository.dry_run``

    Returns:
        Fully constructed Repository, ready for synth()

    Raises:
        ConfigError: Invalid configuration
        StructuralError: Duplicate project ids and similar tree errors
        OutputCollisionError: Two projects target the same file
    """
    section = config.get('repository') or {}
    base = Path(base_dir).expanduser() if base_dir is not None else Path.cwd()
    outdir = Path(section.get('outdir') or '.').expanduser()
    if not outdir.is_absolute():
        outdir = base / outdir

    if dry_run is None:
        dry_run = bool(section.get('dry_run', False))

    repository = Repository(
        outdir,
        id=section.get('id') or 'root',
        platform=section.get('platform', 'github'),
        platform_options=section.get('platform_options') or None,
        dry_run=dry_run,
    )

    projects = config.get('projects') or []
    if not isinstance(projects, list):
        raise ConfigError("'projects' must be a list")
    for entry in projects:
        add_project(repository, entry)

    logger.debug(f"Built workspace with {len(repository.projects)} projects at {repository.outdir}")
    return repository


def add_project(parent: Node, entry: Dict[str, Any]) -> Project:
    """Create one project (and its nested projects) from a config entry."""
    if not isinstance(entry, dict) or not entry.get('id'):
        raise ConfigError(f"Each project needs an 'id', got {entry!r}")
    unknown = sorted(set(entry) - PROJECT_KEYS)
    if unknown:
        raise ConfigError(f"Unknown keys for project '{entry['id']}': {', '.join(unknown)}")
    for key in ('files', 'workflows', 'jobs'):
        if not isinstance(entry.get(key) or {}, dict):
            raise ConfigError(f"'{key}' of project '{entry['id']}' must be a mapping")

    owners = _string_list(entry, 'owners')
    ignore = _string_list(entry, 'ignore')

    project = Project(
        str(entry['id']),
        parent,
        outdir=entry.get('outdir'),
        owners=owners,
    )
    repository = project.repository

    for path, content in (entry.get('files') or {}).items():
        project.add_file(path, content)

    if ignore:
        if repository.git is None:
            raise ConfigError(
                f"Project '{project.path}' sets ignore patterns but platform '{repository.platform.value}' has no git"
            )
        IgnoreFile(project, patterns=ignore, include_common=False)

    if entry.get('workflows'):
        github = repository.github
        if github is None or github.workflows is None:
            raise ConfigError(
                f"Project '{project.path}' defines workflows but the repository has no GitHub workflows"
            )
        for name, definition in entry['workflows'].items():
            github.workflows.add_workflow(name, definition, owner=project)

    if entry.get('jobs'):
        gitlab = repository.gitlab
        if gitlab is None:
            raise ConfigError(
                f"Project '{project.path}' defines jobs but platform '{repository.platform.value}' is not gitlab"
            )
        for name, definition in entry['jobs'].items():
            gitlab.pipeline.add_job(name, definition, owner=project)

    for child in entry.get('projects') or []:
        add_project(project, child)

    return project


def _string_list(entry: Dict[str, Any], key: str) -> List[str]:
    """Read a list of strings from a project entry; a single string is a list of one."""
    value = entry.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' of project '{entry['id']}' must be a string or a list of strings")
    return value
