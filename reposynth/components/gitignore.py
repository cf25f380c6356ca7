"""
.gitignore generation based on declared languages and extra patterns.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union, TYPE_CHECKING

from .files import GENERATED_MARKER, TextFile

if TYPE_CHECKING:
    from ..domain.node import Node


LANGUAGE_PATTERNS: Dict[str, List[str]] = {
    'python': [
        '__pycache__/',
        '*.py[cod]',
        '*$py.class',
        '*.so',
        'build/',
        'dist/',
        '*.egg-info/',
        '.eggs/',
        '.venv/',
        'venv/',
        '.tox/',
        '.nox/',
        '.coverage',
        '.coverage.*',
        'htmlcov/',
        '.pytest_cache/',
        '.mypy_cache/',
        '.ruff_cache/',
    ],
    'javascript': [
        'node_modules/',
        'npm-debug.log*',
        'yarn-debug.log*',
        'yarn-error.log*',
        '.npm',
        '.eslintcache',
        'coverage/',
        'dist/',
        '*.tsbuildinfo',
    ],
    'typescript': [
        'node_modules/',
        '*.tsbuildinfo',
        'dist/',
        'lib/',
    ],
    'java': [
        '*.class',
        '*.jar',
        '*.war',
        'target/',
        '.gradle/',
        'build/',
        'hs_err_pid*',
    ],
    'go': [
        '*.exe',
        '*.test',
        '*.out',
        '/bin/',
        'vendor/',
    ],
    'rust': [
        '/target/',
        '**/*.rs.bk',
    ],
    'cpp': [
        '*.o',
        '*.obj',
        '*.a',
        '*.lib',
        '*.so',
        '*.dylib',
        'build/',
        'cmake-build-*/',
    ],
}

COMMON_PATTERNS: Dict[str, List[str]] = {
    'OS generated files': [
        '.DS_Store',
        'Thumbs.db',
        'desktop.ini',
    ],
    'Editor files': [
        '.vscode/',
        '.idea/',
        '*.swp',
        '*~',
    ],
    'Environment files': [
        '.env',
        '.env.local',
    ],
    'Logs': [
        '*.log',
    ],
}

LANGUAGE_ALIASES = {
    'js': 'javascript',
    'node': 'javascript',
    'ts': 'typescript',
    'c++': 'cpp',
    'golang': 'go',
}


def _normalize_language(language: str) -> str:
    key = language.strip().lower()
    return LANGUAGE_ALIASES.get(key, key)


def _get_language_patterns(language: str) -> List[str]:
    """Get .gitignore patterns for a specific language (case-insensitive)."""
    return LANGUAGE_PATTERNS.get(_normalize_language(language), [])


def _format_section(title: str, patterns: Iterable[str]) -> str:
    """Format a section of .gitignore patterns."""
    patterns = list(patterns)
    if not patterns:
        return ""
    return "\n".join([f"# {title}"] + patterns)


def generate_gitignore_content(
    languages: Iterable[str] = (),
    patterns: Iterable[str] = (),
    include_common: bool = True,
) -> str:
    """Generate .gitignore content.

    Args:
        languages: Language names (e.g. "Python", "rust")
        patterns: Extra patterns, kept in the given order
        include_common: Include OS, editor, env and log patterns

    Returns:
        Complete .gitignore content as string
    """
    sections = []

    if include_common:
        for title, common in COMMON_PATTERNS.items():
            sections.append(_format_section(title, common))

    seen = set()
    language_patterns = []
    for language in languages:
        for pattern in _get_language_patterns(language):
            if pattern not in seen:
                seen.add(pattern)
                language_patterns.append(pattern)
    if language_patterns:
        sections.append(_format_section("Language-specific files", language_patterns))

    extra = [p for p in dict.fromkeys(patterns) if p not in seen]
    if extra:
        sections.append(_format_section("Project-specific files", extra))

    return "\n\n".join(s for s in sections if s) + "\n"


class IgnoreFile(TextFile):
    """
    Manages a .gitignore file.

    Example:
        ignore = IgnoreFile(repo, languages=["python"])
        ignore.add_patterns("/coverage", "*.tmp")
    """

    file_type = "gitignore"

    def __init__(
        self,
        node: 'Node',
        path: Union[str, Path] = '.gitignore',
        *,
        languages: Optional[Iterable[str]] = None,
        patterns: Optional[Iterable[str]] = None,
        include_common: bool = True,
    ):
        super().__init__(node, path, marker=True)
        self.languages: List[str] = list(languages or [])
        self.patterns: List[str] = list(patterns or [])
        self.include_common = include_common

    def add_languages(self, *languages: str) -> None:
        for language in languages:
            if language not in self.languages:
                self.languages.append(language)

    def add_patterns(self, *patterns: str) -> None:
        for pattern in patterns:
            if pattern not in self.patterns:
                self.patterns.append(pattern)

    def render(self) -> str:
        body = generate_gitignore_content(self.languages, self.patterns, self.include_common)
        return f"# {GENERATED_MARKER}\n\n{body}"
