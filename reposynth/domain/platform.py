"""
Platform variants for reposynth.

Every Repository carries exactly one variant from a closed set:

    NoPlatform  - plain directory, nothing composed
    Git         - .gitignore and CODEOWNERS
    GitHub(Git) - Git bundle plus GitHub Actions workflows
    GitLab(Git) - Git bundle plus a GitLab CI pipeline

The GitHub and GitLab configuration surfaces have nothing in common, so
there is no shared CI interface. Code that needs platform behavior checks
the concrete variant (``repo.github``, ``repo.gitlab``) and uses what that
variant offers.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union, TYPE_CHECKING

from ..components.codeowners import Codeowners
from ..components.files import TextFile
from ..components.github import GitHubWorkflows
from ..components.gitignore import IgnoreFile
from ..components.gitlab import GitLabPipeline
from ..errors import ConfigError

if TYPE_CHECKING:
    from .repository import Repository


class Platform(Enum):
    """The closed set of platform variants."""
    NONE = "none"
    GIT = "git"
    GITHUB = "github"
    GITLAB = "gitlab"

    @classmethod
    def parse(cls, value: Union[str, 'Platform', None]) -> 'Platform':
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ', '.join(p.value for p in cls)
            raise ConfigError(f"Unknown platform '{value}'. Supported: {supported}")


@dataclass
class GitOptions:
    """Options shared by every Git-based variant."""
    ignore: List[str] = field(default_factory=list)
    ignore_languages: List[str] = field(default_factory=list)
    codeowners: bool = True

    @classmethod
    def from_value(cls, value: Any) -> 'GitOptions':
        """Build options from an options instance, a dict, or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, dict):
            raise ConfigError(f"{cls.__name__} must be a mapping, got {type(value).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(value) - known)
        if unknown:
            raise ConfigError(f"Unknown {cls.__name__} keys: {', '.join(unknown)}")
        return cls(**value)


@dataclass
class GitHubOptions(GitOptions):
    workflows: bool = True
    pull_request_template: Optional[List[str]] = None


@dataclass
class GitLabOptions(GitOptions):
    stages: List[str] = field(default_factory=lambda: ['build', 'test', 'deploy'])


class PlatformVariant:
    """Base of the closed variant set. Not meant to be extended elsewhere."""

    platform: Platform = Platform.NONE

    def __init__(self, repository: 'Repository'):
        self.repository = repository

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(repository={self.repository.path!r})"


class NoPlatform(PlatformVariant):
    """Workspace that is not under version control."""

    platform = Platform.NONE

    def __init__(self, repository: 'Repository', options: Any = None):
        super().__init__(repository)
        if options:
            raise ConfigError("Platform 'none' takes no options")


class Git(PlatformVariant):
    """Git workspace: manages .gitignore and CODEOWNERS at the repository root."""

    platform = Platform.GIT
    options_class: Type[GitOptions] = GitOptions
    codeowners_path = 'CODEOWNERS'

    def __init__(self, repository: 'Repository', options: Any = None):
        super().__init__(repository)
        self.options = self.options_class.from_value(options)
        self.ignore = IgnoreFile(
            repository,
            languages=self.options.ignore_languages,
            patterns=self.options.ignore,
        )
        self.codeowners: Optional[Codeowners] = None
        if self.options.codeowners:
            self.codeowners = Codeowners(repository, self.codeowners_path)


class GitHub(Git):
    """GitHub workspace: Git bundle plus GitHub Actions workflows."""

    platform = Platform.GITHUB
    options_class = GitHubOptions
    codeowners_path = '.github/CODEOWNERS'

    def __init__(self, repository: 'Repository', options: Any = None):
        super().__init__(repository, options)
        self.workflows: Optional[GitHubWorkflows] = None
        if self.options.workflows:
            self.workflows = GitHubWorkflows(repository)
        self.pull_request_template: Optional[TextFile] = None
        if self.options.pull_request_template:
            self.pull_request_template = TextFile(
                repository,
                '.github/pull_request_template.md',
                lines=self.options.pull_request_template,
            )


class GitLab(Git):
    """GitLab workspace: Git bundle plus the .gitlab-ci.yml pipeline."""

    platform = Platform.GITLAB
    options_class = GitLabOptions
    codeowners_path = '.gitlab/CODEOWNERS'

    def __init__(self, repository: 'Repository', options: Any = None):
        super().__init__(repository, options)
        self.pipeline = GitLabPipeline(repository, stages=self.options.stages)


VARIANTS: Dict[Platform, Type[PlatformVariant]] = {
    Platform.NONE: NoPlatform,
    Platform.GIT: Git,
    Platform.GITHUB: GitHub,
    Platform.GITLAB: GitLab,
}


def create_variant(
    platform: Union[str, Platform, None],
    repository: 'Repository',
    options: Any = None,
) -> PlatformVariant:
    """Construct the variant for platform and compose it onto repository."""
    variant_class = VARIANTS[Platform.parse(platform)]
    return variant_class(repository, options)
