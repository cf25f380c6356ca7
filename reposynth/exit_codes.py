"""
Standard exit codes for reposynth commands.

Following Unix/POSIX conventions for command-line tools; the
application range starts at 64 (see sysexits.h).
"""

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, existing file, etc.)

# Application-specific exit codes
CONFIG_ERROR = 66        # Workspace config missing or invalid
STRUCTURE_ERROR = 72     # Invalid construct tree
LOOKUP_ERROR = 73        # Node has no repository ancestor
SYNTHESIS_ERROR = 74     # A component hook failed during synth
COLLISION_ERROR = 75     # Two nodes claimed the same output file
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Keyed by class name so errors.py does not need to import this module
EXCEPTION_EXIT_CODES = {
    'ConfigError': CONFIG_ERROR,
    'StructuralError': STRUCTURE_ERROR,
    'RepositoryNotFoundError': LOOKUP_ERROR,
    'SynthesisError': SYNTHESIS_ERROR,
    'OutputCollisionError': COLLISION_ERROR,
}


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the exit code for an exception raised by a command.

    CommandError carries its own code; reposynth errors are looked up by
    class name; anything else is a general error.
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    return EXCEPTION_EXIT_CODES.get(type(exc).__name__, GENERAL_ERROR)
