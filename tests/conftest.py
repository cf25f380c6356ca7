"""Shared fixtures for reposynth tests."""

import os

import pytest

from reposynth.domain.autowrap import AutoWrapPolicy, set_default_policy


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Run every test in its own directory with a fresh auto-wrap policy.

    Implicit repositories default to the current directory, so this keeps
    anything a test writes inside tmp_path.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('HOME', str(tmp_path / 'home'))
    for key in list(os.environ):
        if key.startswith('REPOSYNTH_'):
            monkeypatch.delenv(key)
    previous = set_default_policy(AutoWrapPolicy())
    yield tmp_path
    set_default_policy(previous)
