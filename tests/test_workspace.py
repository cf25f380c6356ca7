"""Tests for building a workspace from configuration."""

import yaml
import pytest

from reposynth.config import get_default_config, get_example_config, merge_configs
from reposynth.domain import Project, Repository
from reposynth.errors import ConfigError, OutputCollisionError, StructuralError
from reposynth.services import build_workspace


def workspace(**overrides):
    return merge_configs(get_default_config(), overrides)


class TestBuildWorkspace:
    """Tests for build_workspace."""

    def test_example_config(self, tmp_path):
        repo = build_workspace(get_example_config(), base_dir=tmp_path)

        assert isinstance(repo, Repository)
        assert repo.outdir == tmp_path.resolve()
        assert [p.id for p in repo.projects] == ["api", "web"]
        assert repo.projects[1].owners == ["@my-org/web"]

        repo.synth()

        assert (tmp_path / "api" / "README.md").read_text() == "# api\n"
        assert '"private": true' in (tmp_path / "web" / "package.json").read_text()
        assert "__pycache__/" in (tmp_path / ".gitignore").read_text()
        assert "/web/" in (tmp_path / ".github" / "CODEOWNERS").read_text()

    def test_repository_section(self, tmp_path):
        config = workspace(repository={"id": "mono", "outdir": "out", "platform": "git", "dry_run": True})

        repo = build_workspace(config, base_dir=tmp_path)

        assert repo.id == "mono"
        assert repo.outdir == (tmp_path / "out").resolve()
        assert repo.git is not None and repo.github is None
        assert repo.dry_run

    def test_dry_run_override(self, tmp_path):
        config = workspace(repository={"dry_run": True})

        assert build_workspace(config, base_dir=tmp_path, dry_run=False).dry_run is False

    def test_nested_projects(self, tmp_path):
        config = workspace(projects=[
            {"id": "api", "projects": [{"id": "client", "files": {"setup.cfg": "[metadata]"}}]},
        ])

        repo = build_workspace(config, base_dir=tmp_path)
        client = repo.projects[1]

        assert client.path == "root/api/client"
        assert isinstance(client.parent, Project)
        assert client.outdir == tmp_path.resolve() / "api" / "client"

    def test_project_outdir_and_ignore(self, tmp_path):
        config = workspace(
            repository={"platform": "git"},
            projects=[{"id": "docs", "outdir": "site", "ignore": ["/_build"]}],
        )

        build_workspace(config, base_dir=tmp_path).synth()

        assert (tmp_path / "site" / ".gitignore").read_text().endswith("/_build\n")

    def test_single_owner_string(self, tmp_path):
        config = workspace(projects=[{"id": "api", "owners": "@org/api"}])

        repo = build_workspace(config, base_dir=tmp_path)
        repo.synth()

        assert repo.projects[0].owners == ["@org/api"]
        lines = (tmp_path / ".github" / "CODEOWNERS").read_text().splitlines()
        assert lines[-1].split() == ["/api/", "@org/api"]

    def test_single_ignore_string(self, tmp_path):
        config = workspace(repository={"platform": "git"}, projects=[{"id": "api", "ignore": "*.tmp"}])

        build_workspace(config, base_dir=tmp_path).synth()

        content = (tmp_path / "api" / ".gitignore").read_text()
        assert content.endswith("# Project-specific files\n*.tmp\n")

    def test_github_workflows(self, tmp_path):
        config = workspace(projects=[
            {"id": "api", "workflows": {"api-ci": {"on": ["push"], "jobs": {}}}},
        ])

        repo = build_workspace(config, base_dir=tmp_path)
        workflow = repo.github.workflows.workflows["api-ci"]

        assert workflow.node is repo.projects[0]

    def test_gitlab_jobs(self, tmp_path):
        config = workspace(
            repository={"platform": "gitlab"},
            projects=[
                {"id": "api", "jobs": {"api-test": {"stage": "test", "script": ["make test"]}}},
                {"id": "web", "jobs": {"web-build": {"stage": "build", "script": ["npm ci"]}}},
            ],
        )

        build_workspace(config, base_dir=tmp_path).synth()

        document = yaml.safe_load((tmp_path / ".gitlab-ci.yml").read_text())
        assert set(document) == {"stages", "api-test", "web-build"}


class TestInvalidWorkspace:
    """Configuration errors are reported before anything is written."""

    @pytest.mark.parametrize("entry", [{}, {"owners": ["@x"]}, "api"])
    def test_project_needs_id(self, tmp_path, entry):
        with pytest.raises(ConfigError, match="needs an 'id'"):
            build_workspace(workspace(projects=[entry]), base_dir=tmp_path)

    def test_unknown_key(self, tmp_path):
        with pytest.raises(ConfigError, match="Unknown keys for project 'api': language"):
            build_workspace(workspace(projects=[{"id": "api", "language": "go"}]), base_dir=tmp_path)

    def test_projects_must_be_list(self, tmp_path):
        with pytest.raises(ConfigError):
            build_workspace(workspace(projects={"id": "api"}), base_dir=tmp_path)

    def test_files_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="'files'"):
            build_workspace(workspace(projects=[{"id": "api", "files": ["README.md"]}]), base_dir=tmp_path)

    def test_workflows_need_github(self, tmp_path):
        config = workspace(repository={"platform": "gitlab"}, projects=[{"id": "api", "workflows": {"ci": {}}}])
        with pytest.raises(ConfigError, match="no GitHub workflows"):
            build_workspace(config, base_dir=tmp_path)

    def test_jobs_need_gitlab(self, tmp_path):
        config = workspace(projects=[{"id": "api", "jobs": {"test": {"stage": "test"}}}])
        with pytest.raises(ConfigError, match="is not gitlab"):
            build_workspace(config, base_dir=tmp_path)

    def test_ignore_needs_git(self, tmp_path):
        config = workspace(repository={"platform": "none"}, projects=[{"id": "api", "ignore": ["/x"]}])
        with pytest.raises(ConfigError, match="has no git"):
            build_workspace(config, base_dir=tmp_path)

    def test_unknown_platform(self, tmp_path):
        with pytest.raises(ConfigError):
            build_workspace(workspace(repository={"platform": "svn"}), base_dir=tmp_path)

    def test_duplicate_project_ids(self, tmp_path):
        with pytest.raises(StructuralError):
            build_workspace(workspace(projects=[{"id": "api"}, {"id": "api", "outdir": "other"}]), base_dir=tmp_path)

    @pytest.mark.parametrize("key,value", [
        ("owners", ["@api", 3]),
        ("owners", {"team": "@api"}),
        ("ignore", [["*.tmp"]]),
        ("ignore", 42),
    ])
    def test_string_lists(self, tmp_path, key, value):
        config = workspace(repository={"platform": "git"}, projects=[{"id": "api", key: value}])
        with pytest.raises(ConfigError, match=f"'{key}' of project 'api'"):
            build_workspace(config, base_dir=tmp_path)

    def test_job_definition_must_be_mapping(self, tmp_path):
        config = workspace(repository={"platform": "gitlab"}, projects=[{"id": "api", "jobs": {"build": "make"}}])
        with pytest.raises(ConfigError, match="GitLab job 'build' must be a mapping"):
            build_workspace(config, base_dir=tmp_path)

    def test_workflow_definition_must_be_mapping(self, tmp_path):
        config = workspace(projects=[{"id": "api", "workflows": {"ci": ["push"]}}])
        with pytest.raises(ConfigError, match="Workflow 'ci' must be a mapping"):
            build_workspace(config, base_dir=tmp_path)

    def test_invalid_workflow_name(self, tmp_path):
        config = workspace(projects=[{"id": "api", "workflows": {"../ci": {}}}])
        with pytest.raises(ConfigError, match="Invalid workflow name"):
            build_workspace(config, base_dir=tmp_path)

    def test_colliding_files(self, tmp_path):
        config = workspace(projects=[
            {"id": "api", "outdir": ".", "files": {"README.md": "# api"}},
            {"id": "web", "outdir": ".", "files": {"README.md": "# web"}},
        ])

        with pytest.raises(OutputCollisionError):
            build_workspace(config, base_dir=tmp_path)
        assert list(tmp_path.iterdir()) == []
