"""
Domain layer for reposynth.

Contains the construct tree:
- Node: base tree element with id, parent and ordered children
- Component: behavior unit with lifecycle hooks, owned by a node
- Repository: tree root, one per workspace
- Project: buildable unit below a repository
- Platform variants: NoPlatform, Git, GitHub, GitLab
- AutoWrapPolicy: creates a repository for projects built without one
"""

from .node import Node
from .component import Component
from .repository import Repository
from .project import Project
from .platform import (
    Platform,
    PlatformVariant,
    NoPlatform,
    Git,
    GitHub,
    GitLab,
    GitOptions,
    GitHubOptions,
    GitLabOptions,
)
from .autowrap import AutoWrapPolicy, WrapState, get_default_policy, set_default_policy
from .operation import OperationStatus, FileResult, SynthesisSummary

__all__ = [
    'Node',
    'Component',
    'Repository',
    'Project',
    'Platform',
    'PlatformVariant',
    'NoPlatform',
    'Git',
    'GitHub',
    'GitLab',
    'GitOptions',
    'GitHubOptions',
    'GitLabOptions',
    'AutoWrapPolicy',
    'WrapState',
    'get_default_policy',
    'set_default_policy',
    'OperationStatus',
    'FileResult',
    'SynthesisSummary',
]
