"""
Tests for the reposynth command line.
"""

import json
import pytest
import yaml
from click.testing import CliRunner

from reposynth.cli import cli
from reposynth.cli_utils import load_workspace_config
from reposynth.domain import Platform, Project, Repository
from reposynth.errors import ConfigError, OutputCollisionError, RepositoryNotFoundError, SynthesisError
from reposynth.exit_codes import (
    COLLISION_ERROR,
    CONFIG_ERROR,
    GENERAL_ERROR,
    SYNTHESIS_ERROR,
    USAGE_ERROR,
    CommandError,
    get_exit_code_for_exception,
)


def json_lines(output):
    """Parse the JSON lines of an output, ignoring anything else."""
    return [json.loads(line) for line in output.splitlines() if line.startswith('{')]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workspace_file(tmp_path):
    """Write a workspace config and return its path."""
    def write(config):
        path = tmp_path / 'workspace.yaml'
        path.write_text(yaml.safe_dump(config))
        return path
    return write


class TestSynthCommand:
    """Tests for `reposynth synth`."""

    def test_synth_writes_files(self, runner, tmp_path, workspace_file):
        path = workspace_file({
            'repository': {'outdir': 'out'},
            'projects': [{'id': 'api', 'files': {'README.md': '# api'}}],
        })

        result = runner.invoke(cli, ['synth', '-c', str(path)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / 'out' / 'api' / 'README.md').read_text() == '# api\n'
        assert 'Wrote api/README.md' in result.output

    def test_synth_json(self, runner, tmp_path, workspace_file):
        path = workspace_file({
            'repository': {'platform': 'none'},
            'projects': [{'id': 'api', 'files': {'a.txt': 'a', 'b.json': {'b': 1}}}],
        })

        result = runner.invoke(cli, ['synth', '-c', str(path), '--json'])

        assert result.exit_code == 0, result.output
        records = json_lines(result.output)
        files = [r for r in records if r.get('type') != 'summary']
        summary = records[-1]
        assert [r['file_type'] for r in files] == ['text', 'json']
        assert all(r['node'] == 'root/api' for r in files)
        assert summary['type'] == 'summary'
        assert summary['successful'] == 2
        assert summary['dry_run'] is False

    def test_synth_dry_run(self, runner, tmp_path, workspace_file):
        path = workspace_file({'projects': [{'id': 'api', 'files': {'README.md': '# api'}}]})

        result = runner.invoke(cli, ['synth', '-c', str(path), '--dry-run', '--json'])

        assert result.exit_code == 0, result.output
        assert not (tmp_path / 'api').exists()
        statuses = {r['status'] for r in json_lines(result.output) if 'status' in r}
        assert statuses <= {'dry_run', 'skipped'}

    def test_synth_pretty(self, runner, workspace_file):
        path = workspace_file({'projects': [{'id': 'api', 'files': {'README.md': '# api'}}]})

        result = runner.invoke(cli, ['synth', '-c', str(path), '--pretty', '--dry-run'])

        assert result.exit_code == 0, result.output
        assert 'Synthesis (dry run)' in result.output

    def test_collision_exit_code(self, runner, tmp_path, workspace_file):
        path = workspace_file({'projects': [
            {'id': 'api', 'outdir': '.', 'files': {'README.md': '# api'}},
            {'id': 'web', 'outdir': '.', 'files': {'README.md': '# web'}},
        ]})

        result = runner.invoke(cli, ['synth', '-c', str(path), '--json'])

        assert result.exit_code == COLLISION_ERROR
        error = json_lines(result.output)[0]
        assert error['type'] == 'OutputCollisionError'
        assert error['path'].endswith('README.md')
        assert not (tmp_path / 'README.md').exists()

    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(cli, ['synth', '-c', str(tmp_path / 'missing.yaml')])

        assert result.exit_code == CONFIG_ERROR
        assert 'Config file not found' in result.output

    def test_invalid_project(self, runner, workspace_file):
        path = workspace_file({'projects': [{'id': 'api', 'jobs': {'test': {}}}]})

        result = runner.invoke(cli, ['synth', '-c', str(path)])

        assert result.exit_code == CONFIG_ERROR
        assert 'is not gitlab' in result.output

    def test_job_that_is_not_a_mapping(self, runner, workspace_file):
        path = workspace_file({
            'repository': {'platform': 'gitlab'},
            'projects': [{'id': 'api', 'jobs': {'build': 'make'}}],
        })

        result = runner.invoke(cli, ['synth', '-c', str(path), '--json'])

        assert result.exit_code == CONFIG_ERROR
        error = json_lines(result.output)[0]
        assert error['type'] == 'ConfigError'
        assert "GitLab job 'build' must be a mapping" in error['error']

    def test_config_from_working_directory(self, runner, tmp_path):
        (tmp_path / '.reposynth.yaml').write_text(
            yaml.safe_dump({'repository': {'platform': 'git'}, 'projects': [{'id': 'lib'}]})
        )

        result = runner.invoke(cli, ['synth'])

        assert result.exit_code == 0, result.output
        assert (tmp_path / '.gitignore').exists()


class TestTreeCommand:
    """Tests for `reposynth tree`."""

    def test_tree_json(self, runner, workspace_file):
        path = workspace_file({
            'repository': {'platform': 'gitlab'},
            'projects': [{'id': 'api', 'owners': ['@api'], 'projects': [{'id': 'client'}]}],
        })

        result = runner.invoke(cli, ['tree', '-c', str(path), '--json'])

        assert result.exit_code == 0, result.output
        records = json_lines(result.output)
        assert [r['path'] for r in records] == ['root', 'root/api', 'root/api/client']
        assert records[0]['platform'] == 'gitlab'
        assert records[0]['components'] == ['IgnoreFile', 'Codeowners', 'GitLabPipeline']
        assert records[1]['owners'] == ['@api']

    def test_tree_does_not_write(self, runner, tmp_path, workspace_file):
        path = workspace_file({'projects': [{'id': 'api', 'files': {'README.md': '# api'}}]})

        result = runner.invoke(cli, ['tree', '-c', str(path)])

        assert result.exit_code == 0, result.output
        assert 'api' in result.output
        assert not (tmp_path / 'api').exists()


class TestConfigCommand:
    """Tests for `reposynth config`."""

    def test_init_and_show(self, runner, tmp_path):
        result = runner.invoke(cli, ['config', 'init'])
        assert result.exit_code == 0, result.output
        assert (tmp_path / '.reposynth.yaml').exists()

        result = runner.invoke(cli, ['config', 'show'])
        assert result.exit_code == 0, result.output
        config = json_lines(result.output)[0]
        assert [p['id'] for p in config['projects']] == ['api', 'web']

    def test_init_refuses_to_overwrite(self, runner, tmp_path):
        (tmp_path / '.reposynth.yaml').write_text('projects: []\n')

        result = runner.invoke(cli, ['config', 'init'])

        assert result.exit_code == USAGE_ERROR
        assert (tmp_path / '.reposynth.yaml').read_text() == 'projects: []\n'

        result = runner.invoke(cli, ['config', 'init', '--force'])
        assert result.exit_code == 0

    def test_show_path(self, runner, tmp_path):
        result = runner.invoke(cli, ['config', 'show', '--path'])

        info = json_lines(result.output)[0]
        assert info['exists'] is False
        assert info['config_path'].endswith('.reposynth.yaml')


class TestAutoWrapConfig:
    """The auto_wrap section sets the process-wide policy."""

    def test_platform_of_implicit_repository(self, tmp_path):
        (tmp_path / '.reposynth.yaml').write_text(yaml.safe_dump({'auto_wrap': {'platform': 'gitlab'}}))

        load_workspace_config(None)

        repo = Repository.of(Project('legacy'))
        assert repo.platform is Platform.GITLAB
        assert repo.gitlab is not None

    def test_disabled(self, workspace_file):
        path = workspace_file({'auto_wrap': {'enabled': False}})

        load_workspace_config(str(path))

        project = Project('orphan')
        assert project.parent is None
        with pytest.raises(RepositoryNotFoundError):
            Repository.of(project)

    def test_unknown_platform(self, runner, workspace_file):
        path = workspace_file({'auto_wrap': {'platform': 'svn'}})

        result = runner.invoke(cli, ['synth', '-c', str(path)])

        assert result.exit_code == CONFIG_ERROR
        assert "Unknown platform 'svn'" in result.output


class TestExitCodes:
    """Tests for exception to exit code mapping."""

    @pytest.mark.parametrize("exc,expected", [
        (ConfigError("bad"), CONFIG_ERROR),
        (OutputCollisionError("/x", "root/a", "root/b"), COLLISION_ERROR),
        (SynthesisError("root/a", "synthesize", RuntimeError("boom")), SYNTHESIS_ERROR),
        (CommandError("usage", USAGE_ERROR), USAGE_ERROR),
        (RuntimeError("other"), GENERAL_ERROR),
    ])
    def test_mapping(self, exc, expected):
        assert get_exit_code_for_exception(exc) == expected
