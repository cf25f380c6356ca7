"""
Components that produce files during synthesis.

- FileComponent, TextFile, JsonFile, YamlFile: generic files
- IgnoreFile: .gitignore (Git-based variants)
- Codeowners: ownership file aggregated from every project
- GitHubWorkflows: GitHub Actions workflows (GitHub variant)
- GitLabPipeline: .gitlab-ci.yml (GitLab variant)
"""

from .files import FileComponent, TextFile, JsonFile, YamlFile, file_for
from .gitignore import IgnoreFile
from .codeowners import Codeowners
from .github import GitHubWorkflows
from .gitlab import GitLabPipeline

__all__ = [
    'FileComponent',
    'TextFile',
    'JsonFile',
    'YamlFile',
    'file_for',
    'IgnoreFile',
    'Codeowners',
    'GitHubWorkflows',
    'GitLabPipeline',
]
