"""Tests for auto-wrapping projects built without a repository."""

import pytest

from reposynth.domain import (
    AutoWrapPolicy,
    GitHub,
    Node,
    Project,
    Repository,
    WrapState,
    set_default_policy,
)
from reposynth.components import IgnoreFile
from reposynth.errors import ConfigError, OutputCollisionError, RepositoryNotFoundError


class TestAutoWrap:
    """Tests for the implicit repository."""

    def test_parentless_project_gets_one_repository(self):
        project = Project("legacy")

        repo = Repository.of(project)
        assert isinstance(repo, Repository)
        assert project.parent is repo
        assert repo.parent is None
        assert repo.projects == [project]
        assert [n for n in repo.preorder() if isinstance(n, Repository)] == [repo]

    def test_implicit_repository_uses_default_platform(self):
        project = Project("legacy")

        repo = Repository.of(project)
        assert isinstance(repo.variant, GitHub)
        assert repo.github is not None

    def test_implicit_repository_shares_project_outdir(self, tmp_path):
        project = Project("legacy", outdir=tmp_path / "ws")

        repo = Repository.of(project)
        assert repo.outdir == (tmp_path / "ws").resolve()
        assert project.outdir == repo.outdir

    def test_subclass_setup_sees_attached_node(self):
        seen = {}

        class ApiProject(Project):
            def __init__(self, **kwargs):
                super().__init__("api", **kwargs)
                seen["parent"] = self.parent
                seen["repository"] = Repository.of(self)
                self.add_file("README.md", "# api")

        project = ApiProject()

        assert isinstance(seen["parent"], Repository)
        assert seen["repository"] is project.parent
        assert project.files[0].path == project.outdir / "README.md"

    def test_detached_chain_is_spliced_under_repository(self):
        group = Node("packages")
        project = Project("api", group)

        repo = Repository.of(project)
        assert group.parent is repo
        assert project.path == "root/packages/api"
        assert project.outdir == repo.outdir / "api"

    def test_no_wrap_when_repository_exists(self):
        repo = Repository(platform="none")
        project = Project("api", repo)

        assert project.parent is repo
        assert Repository.of(project) is repo
        assert project.root is repo

    def test_implicit_repository_is_an_ordinary_repository(self, tmp_path):
        project = Project("legacy", outdir=tmp_path)
        project.add_file("hello.txt", "hi")

        Repository.of(project).synth()

        assert (tmp_path / "hello.txt").read_text() == "hi\n"
        assert (tmp_path / ".gitignore").exists()

    def test_overlapping_ignore_file_is_a_configuration_error(self):
        """The implicit repository already owns .gitignore at the same outdir."""
        project = Project("legacy")

        with pytest.raises(OutputCollisionError):
            IgnoreFile(project)


class TestAutoWrapDisabled:
    """Tests for auto-wrap turned off."""

    def test_project_stays_orphaned(self):
        project = Project("orphan", auto_wrap=False)

        assert project.parent is None

    def test_lookup_raises_lookup_error_naming_node(self):
        project = Project("orphan", auto_wrap=False)

        with pytest.raises(LookupError) as exc_info:
            Repository.of(project, policy=AutoWrapPolicy(enabled=False))

        assert isinstance(exc_info.value, RepositoryNotFoundError)
        assert exc_info.value.node_path == "orphan"
        assert "orphan" in str(exc_info.value)

    def test_process_wide_policy(self):
        set_default_policy(AutoWrapPolicy(enabled=False))
        group = Node("group")
        project = Project("api", group)

        assert project.root is group
        with pytest.raises(RepositoryNotFoundError):
            Repository.of(project)

    def test_lookup_wraps_orphan_when_enabled(self):
        project = Project("orphan", auto_wrap=False)

        repo = Repository.of(project)

        assert project.parent is repo
        assert Repository.of(project) is repo


class TestAutoWrapPolicy:
    """Tests for the policy object."""

    def test_state(self):
        policy = AutoWrapPolicy()
        orphan = Node("orphan")
        repo = Repository(platform="none")
        child = Node("child", repo)

        assert policy.state(orphan) == WrapState.NO_REPOSITORY_YET
        assert policy.state(child) == WrapState.REPOSITORY_ESTABLISHED

    def test_ensure_repository_is_noop_when_established(self):
        policy = AutoWrapPolicy()
        repo = Repository(platform="none")
        child = Node("child", repo)

        assert policy.ensure_repository(child) is repo
        assert repo.children == (child,)

    def test_custom_platform(self):
        policy = AutoWrapPolicy(platform="gitlab", platform_options={"stages": ["test"]})
        project = Project("api", policy=policy)

        repo = Repository.of(project)
        assert repo.gitlab is not None
        assert repo.gitlab.pipeline.stages == ["test"]

    def test_from_config(self):
        policy = AutoWrapPolicy.from_config({"auto_wrap": {"enabled": False, "platform": "git"}})

        assert policy.enabled is False
        assert policy.platform == "git"

    def test_from_config_empty_section(self):
        policy = AutoWrapPolicy.from_config({"auto_wrap": None})

        assert policy == AutoWrapPolicy()

    def test_from_config_unknown_platform(self):
        with pytest.raises(ConfigError, match="Unknown platform 'svn'"):
            AutoWrapPolicy.from_config({"auto_wrap": {"platform": "svn"}})
