"""Decides whether a single component file is missing the ``use client`` directive."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..errors import FileReadError
from ..logging import get_logger
from ..models import (
    REASON_CLIENT_SIGNAL,
    REASON_DIRECTIVE_PRESENT,
    REASON_NO_CLIENT_SIGNAL,
    REASON_SERVER_ONLY,
    Classification,
    SignalMatch,
    SourceFile,
)
from .base import SignalDetector
from .constants import SERVER_FUNCTIONS
from .detectors import (
    ClientEventDetector,
    ClientGlobalDetector,
    DynamicFunctionDetector,
    HookDetector,
)
from .text import PreparedSource

logger = get_logger("classifier")


class DirectiveClassifier:
    """Stateless text heuristic shared by every file in a scan.

    The steps run in a fixed order: normalise directive quoting, strip
    comments, stop if the directive is present, stop if a server-only
    data-fetching function is mentioned, then flag the file when any
    detector reports client usage.
    """

    def __init__(
        self,
        detectors: Sequence[SignalDetector] | None = None,
        server_functions: Iterable[str] = (),
    ) -> None:
        if detectors is None:
            detectors = (
                HookDetector(),
                ClientGlobalDetector(),
                ClientEventDetector(),
                DynamicFunctionDetector(),
            )
        self.detectors = list(detectors)
        self.server_functions = tuple(
            dict.fromkeys([*SERVER_FUNCTIONS, *(name for name in server_functions if name)])
        )

    def classify(self, path: str | os.PathLike[str]) -> Optional[Path]:
        """Return the resolved path when the file needs the directive, else None."""
        return self.evaluate(path).flagged_path

    def evaluate(self, path: str | os.PathLike[str]) -> Classification:
        source = SourceFile(Path(path))
        try:
            text = source.read_text()
        except UnicodeDecodeError as exc:
            raise FileReadError(f"{source.path} is not valid UTF-8 text: {exc.reason}", source.path) from exc
        except OSError as exc:
            raise FileReadError(f"Cannot read {source.path}: {exc.strerror or exc}", source.path) from exc
        return self.classify_text(text, source.path)

    def classify_text(self, text: str, path: str | os.PathLike[str]) -> Classification:
        resolved = Path(path).resolve()
        source = PreparedSource.from_text(text)

        if source.has_directive():
            return Classification(path=resolved, flagged=False, reason=REASON_DIRECTIVE_PRESENT)

        server_hit = next((name for name in self.server_functions if name in source.code), None)
        if server_hit is not None:
            logger.debug("%s treated as server-only (%s)", resolved, server_hit)
            return Classification(path=resolved, flagged=False, reason=REASON_SERVER_ONLY)

        matches: List[SignalMatch] = []
        for detector in self.detectors:
            match = detector.detect(source)
            if match is not None:
                matches.append(match)

        if not matches:
            return Classification(path=resolved, flagged=False, reason=REASON_NO_CLIENT_SIGNAL)

        logger.debug(
            "%s needs the directive: %s",
            resolved,
            ", ".join(f"{match.detector}={match.token}" for match in matches),
        )
        return Classification(path=resolved, flagged=True, reason=REASON_CLIENT_SIGNAL, matches=matches)


_DEFAULT_CLASSIFIER = DirectiveClassifier()


def classify(path: str | os.PathLike[str]) -> Optional[Path]:
    """Classify one file with the built-in signal catalogs."""
    return _DEFAULT_CLASSIFIER.classify(path)


__all__ = ["DirectiveClassifier", "classify"]
