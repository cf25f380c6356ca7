"""
reposynth - Synthesize configuration files for a source-controlled workspace.

The workspace is modeled as a construct tree: a Repository at the root,
Projects below it, and Components on every node. Synthesizing the tree
runs each component's hooks and writes the files they produce.

Quick Start:
    from reposynth import Repository, Project

    repo = Repository("/path/to/workspace", platform="github")
    api = Project("api", repo, owners=["@org/api"])
    api.add_file("README.md", "# api")

    repo.github.workflows.add_workflow("ci", {"on": ["push"], "jobs": {}})
    repo.synth()

    # Projects built without a repository are wrapped in one automatically
    legacy = Project("legacy")
    Repository.of(legacy).projects   # [legacy]

Platforms:
    none    - no version control
    git     - .gitignore, CODEOWNERS
    github  - git + .github/CODEOWNERS, GitHub Actions workflows
    gitlab  - git + .gitlab/CODEOWNERS, .gitlab-ci.yml
"""

__version__ = "0.1.0"

# Domain objects
from .domain import (
    Node,
    Component,
    Repository,
    Project,
    Platform,
    NoPlatform,
    Git,
    GitHub,
    GitLab,
    AutoWrapPolicy,
    SynthesisSummary,
)

# Components
from .components import (
    TextFile,
    JsonFile,
    YamlFile,
    IgnoreFile,
    Codeowners,
    GitHubWorkflows,
    GitLabPipeline,
)

# Errors
from .errors import (
    ReposynthError,
    StructuralError,
    RepositoryNotFoundError,
    SynthesisError,
    OutputCollisionError,
    ConfigError,
)

# Configuration
from .config import load_config, save_config
from .services import build_workspace

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "Node",
    "Component",
    "Repository",
    "Project",
    "Platform",
    "NoPlatform",
    "Git",
    "GitHub",
    "GitLab",
    "AutoWrapPolicy",
    "SynthesisSummary",
    # Components
    "TextFile",
    "JsonFile",
    "YamlFile",
    "IgnoreFile",
    "Codeowners",
    "GitHubWorkflows",
    "GitLabPipeline",
    # Errors
    "ReposynthError",
    "StructuralError",
    "RepositoryNotFoundError",
    "SynthesisError",
    "OutputCollisionError",
    "ConfigError",
    # Configuration
    "load_config",
    "save_config",
    "build_workspace",
]
