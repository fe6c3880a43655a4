"""Core data models shared across directivecheck components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

REASON_DIRECTIVE_PRESENT = "directive-present"
REASON_SERVER_ONLY = "server-only"
REASON_CLIENT_SIGNAL = "client-signal"
REASON_NO_CLIENT_SIGNAL = "no-client-signal"


@dataclass(frozen=True)
class SourceFile:
    """A candidate component file; content is read on demand and not kept."""

    path: Path

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8", errors="strict")


@dataclass(frozen=True)
class SignalMatch:
    """A client-usage signal observed in a file."""

    detector: str
    token: str


@dataclass
class Classification:
    """Outcome of running the directive classifier over one file."""

    path: Path
    flagged: bool
    reason: str
    matches: List[SignalMatch] = field(default_factory=list)

    @property
    def flagged_path(self) -> Optional[Path]:
        return self.path if self.flagged else None


@dataclass(frozen=True)
class FileError:
    """A per-file failure recorded during a scan."""

    path: Path
    message: str


@dataclass
class ScanReport:
    """Aggregate result of a scan over a project root."""

    root: Path
    flagged: List[Path] = field(default_factory=list)
    files_scanned: int = 0
    errors: List[FileError] = field(default_factory=list)
    cancelled: bool = False
    details: List[Classification] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.flagged
