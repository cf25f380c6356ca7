"""
Project domain object for reposynth.

A Project is a buildable unit inside a Repository. Projects built the
old way, without any parent, are wrapped in an implicit Repository before
their constructor returns (see autowrap.py), so subclass setup code always
runs against a fully attached node.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union, TYPE_CHECKING

from ..components.files import FileComponent, file_for
from .autowrap import AutoWrapPolicy, get_default_policy
from .node import Node

if TYPE_CHECKING:
    from .repository import Repository

logger = logging.getLogger(__name__)


class Project(Node):
    """
    Buildable unit attached under a Repository.

    Example:
        class ApiProject(Project):
            def __init__(self, **kwargs):
                super().__init__("api", **kwargs)
                # Already attached here, even without a parent
                self.add_file("README.md", "# api")

        api = ApiProject()
        Repository.of(api).projects   # [api]

    Args:
        id: Unique id among siblings
        parent: Repository or intermediate node; None to auto-wrap
        outdir: Output directory. Relative paths are resolved against the
            parent's outdir. Defaults to ``<parent outdir>/<id>``, or to the
            implicit repository's outdir when auto-wrapped.
        owners: Code owners of this project (e.g. ``@team/api``); a single
            string is one owner
        auto_wrap: Override the policy's ``enabled`` flag for this project
        policy: Auto-wrap policy (defaults to the process-wide one)
    """

    def __init__(
        self,
        id: str,
        parent: Optional[Node] = None,
        *,
        outdir: Optional[Union[str, Path]] = None,
        owners: Optional[Union[str, Iterable[str]]] = None,
        auto_wrap: Optional[bool] = None,
        policy: Optional[AutoWrapPolicy] = None,
    ):
        super().__init__(id, parent)
        # A lone string is one owner, not a sequence of characters
        self.owners = [owners] if isinstance(owners, str) else list(owners or [])

        policy = policy or get_default_policy()
        if auto_wrap is not None:
            policy = dataclasses.replace(policy, enabled=auto_wrap)
        if policy.enabled:
            policy.ensure_repository(self, outdir=outdir if parent is None else None)

        # Computed after wrapping so an implicit repository is taken into account
        if parent is None:
            if self.parent is not None:
                self._outdir = self.parent.outdir
            else:
                self._outdir = Path(outdir if outdir is not None else '.').expanduser().resolve()
        elif outdir is not None:
            self._outdir = (self.parent.outdir / Path(outdir).expanduser()).resolve()
        else:
            self._outdir = self.parent.outdir / id

    @property
    def outdir(self) -> Path:
        return self._outdir

    @property
    def repository(self) -> 'Repository':
        from .repository import Repository
        return Repository.of(self)

    @property
    def files(self):
        return [c for c in self.components if isinstance(c, FileComponent)]

    def add_file(self, path: str, content: Any) -> FileComponent:
        """
        Add a generated file below this project's outdir.

        The file type follows the extension: ``.json`` becomes a JsonFile,
        ``.yml``/``.yaml`` a YamlFile, anything else a TextFile.
        """
        return file_for(self, path, content)
