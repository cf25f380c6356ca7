"""
Synthesis result domain objects for reposynth.

Provides standardized result types for the files written (or skipped)
during a synth run, collected into one summary per run.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional


class OperationStatus(Enum):
    """Status of an individual file operation."""
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"
    DRY_RUN = "dry_run"


@dataclass
class FileResult:
    """
    Outcome of synthesizing one file.

    Used to track what happened to each output path during a synth run.
    """
    node_path: str
    file_path: str
    status: OperationStatus
    file_type: str = "text"  # text, json, yaml, gitignore, codeowners, ...
    overwritten: bool = False
    message: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'node': self.node_path,
            'file_path': self.file_path,
            'status': self.status.value,
            'file_type': self.file_type,
            'overwritten': self.overwritten,
        }
        if self.message:
            result['message'] = self.message
        if self.error:
            result['error'] = self.error
        return result


@dataclass
class SynthesisSummary:
    """
    Summary of one synth run over a repository.

    Collects statistics and per-file details from every file component
    that ran.
    """
    repository: str
    total: int = 0
    successful: int = 0
    skipped: int = 0
    failed: int = 0
    dry_run: bool = False
    phase: Optional[str] = None  # last phase started
    details: List[FileResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no failures occurred."""
        return self.failed == 0

    @property
    def paths(self) -> List[str]:
        return [d.file_path for d in self.details]

    def add_detail(self, detail: FileResult) -> None:
        """Add a file result and update counts."""
        self.details.append(detail)
        self.total += 1

        if detail.status == OperationStatus.SUCCESS:
            self.successful += 1
        elif detail.status == OperationStatus.SKIPPED:
            self.skipped += 1
        elif detail.status == OperationStatus.FAILED:
            self.failed += 1
            if detail.error:
                self.errors.append(f"{detail.node_path}: {detail.error}")
        elif detail.status == OperationStatus.DRY_RUN:
            self.successful += 1  # Count dry-run as successful

    def add_error(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'type': 'summary',
            'repository': self.repository,
            'total': self.total,
            'successful': self.successful,
            'skipped': self.skipped,
            'failed': self.failed,
            'dry_run': self.dry_run,
            'errors': self.errors,
        }

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        return json.dumps(self.to_dict(), ensure_ascii=False)
