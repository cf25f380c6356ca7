"""
Error types for reposynth.

Every error raised by the construct tree derives from ReposynthError so
the CLI can map it to an exit code in one place (see exit_codes.py).
"""

from typing import Optional


class ReposynthError(Exception):
    """Base class for all reposynth errors."""


class StructuralError(ReposynthError):
    """
    Invalid change to the construct tree.

    Raised for duplicate sibling ids, reparenting, cycles, attaching a
    repository below another node, and any mutation after synthesis
    has started.
    """


class RepositoryNotFoundError(ReposynthError, LookupError):
    """No repository ancestor exists and auto-wrap is disabled."""

    def __init__(self, node_path: str):
        super().__init__(
            f"No repository found above '{node_path}' and auto-wrap is disabled"
        )
        self.node_path = node_path


class SynthesisError(ReposynthError):
    """A component hook raised during synthesis."""

    def __init__(self, node_path: str, phase: str, cause: BaseException):
        super().__init__(f"{phase} failed at '{node_path}': {cause}")
        self.node_path = node_path
        self.phase = phase
        self.cause = cause


class OutputCollisionError(ReposynthError):
    """Two nodes claimed the same output file."""

    def __init__(self, path: str, first_owner: str, second_owner: str):
        super().__init__(
            f"Output path {path} is claimed by both '{first_owner}' and '{second_owner}'"
        )
        self.path = path
        self.first_owner = first_owner
        self.second_owner = second_owner


class ConfigError(ReposynthError):
    """Workspace configuration could not be loaded or is invalid."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
