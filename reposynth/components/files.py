"""
Generic file components for reposynth.

A FileComponent owns exactly one output path. The path is claimed on the
repository when the component is created, so two nodes can never target
the same file; the second claim fails with OutputCollisionError before any
synthesis runs. Content is rendered and written during ``synthesize()``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Union, TYPE_CHECKING

import yaml

from ..domain.component import Component
from ..domain.operation import FileResult, OperationStatus
from ..errors import ConfigError

if TYPE_CHECKING:
    from ..domain.node import Node

logger = logging.getLogger(__name__)

GENERATED_MARKER = "~~ Generated by reposynth. To modify, edit the workspace definition and run `reposynth synth`."

# Content may be given directly or as a zero-argument callable evaluated at synth time
Content = Union[Any, Callable[[], Any]]


def resolve_content(content: Content) -> Any:
    if callable(content):
        return content()
    return content


class FileComponent(Component):
    """
    Base class for components that write one file.

    Subclasses implement ``render()``; returning None skips the file.

    Args:
        node: Owning node
        path: File path, relative to ``base``
        base: Directory the path is relative to (defaults to node.outdir)
    """

    file_type = "file"

    def __init__(self, node: 'Node', path: Union[str, Path], *, base: Optional[Path] = None):
        from ..domain.repository import Repository

        target = Path(base) if base is not None else node.outdir
        repository = Repository.of(node)
        self.path = repository.claim_output(target / path, node)
        super().__init__(node)

    @property
    def relative_path(self) -> str:
        return self.repository.relative_path(self.path)

    def render(self) -> Optional[str]:
        raise NotImplementedError

    def synthesize(self) -> None:
        self.write()

    def write(self) -> FileResult:
        """Render and write the file, recording the outcome on the run summary."""
        repository = self.repository
        content = self.render()

        if content is None:
            result = FileResult(
                node_path=self.node.path,
                file_path=str(self.path),
                status=OperationStatus.SKIPPED,
                file_type=self.file_type,
                message="Nothing to write",
            )
        elif repository.dry_run:
            logger.info(f"Would write {self.relative_path}")
            result = FileResult(
                node_path=self.node.path,
                file_path=str(self.path),
                status=OperationStatus.DRY_RUN,
                file_type=self.file_type,
            )
        else:
            existed = self.path.exists()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content)
            logger.info(f"Wrote {self.relative_path}")
            result = FileResult(
                node_path=self.node.path,
                file_path=str(self.path),
                status=OperationStatus.SUCCESS,
                file_type=self.file_type,
                overwritten=existed,
            )

        if repository.last_result is not None:
            repository.last_result.add_detail(result)
        return result


class TextFile(FileComponent):
    """Plain text file built from lines."""

    file_type = "text"

    def __init__(
        self,
        node: 'Node',
        path: Union[str, Path],
        lines: Optional[Iterable[str]] = None,
        *,
        marker: bool = False,
        base: Optional[Path] = None,
    ):
        super().__init__(node, path, base=base)
        self.lines: List[str] = list(lines or [])
        self.marker = marker

    def add_line(self, line: str) -> None:
        self.lines.append(line)

    def render(self) -> Optional[str]:
        lines = list(self.lines)
        if self.marker:
            lines.insert(0, f"# {GENERATED_MARKER}")
        return "\n".join(lines) + "\n"


class JsonFile(FileComponent):
    """JSON document; ``obj`` may be a callable evaluated at synth time."""

    file_type = "json"

    def __init__(self, node: 'Node', path: Union[str, Path], obj: Content = None, *, base: Optional[Path] = None):
        super().__init__(node, path, base=base)
        self.obj = obj

    def render(self) -> Optional[str]:
        obj = resolve_content(self.obj)
        if obj is None:
            return None
        return json.dumps(obj, indent=2, ensure_ascii=False) + "\n"


class YamlFile(FileComponent):
    """YAML document; ``obj`` may be a callable evaluated at synth time."""

    file_type = "yaml"

    def __init__(
        self,
        node: 'Node',
        path: Union[str, Path],
        obj: Content = None,
        *,
        marker: bool = True,
        base: Optional[Path] = None,
    ):
        super().__init__(node, path, base=base)
        self.obj = obj
        self.marker = marker

    def render(self) -> Optional[str]:
        obj = resolve_content(self.obj)
        if obj is None:
            return None
        body = yaml.safe_dump(obj, sort_keys=False, default_flow_style=False)
        if self.marker:
            return f"# {GENERATED_MARKER}\n\n{body}"
        return body


def file_for(node: 'Node', path: str, content: Any) -> FileComponent:
    """Create the file component matching the extension of path."""
    suffix = Path(path).suffix.lower()
    if suffix == '.json':
        return JsonFile(node, path, content)
    if suffix in ('.yml', '.yaml'):
        return YamlFile(node, path, content)
    if isinstance(content, str):
        return TextFile(node, path, content.splitlines())
    if isinstance(content, (list, tuple)):
        return TextFile(node, path, [str(line) for line in content])
    raise ConfigError(
        f"Cannot write {type(content).__name__} content to '{path}': use a .json or .yaml file"
    )
