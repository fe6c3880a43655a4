"""Pipeline that locates component files and classifies each one."""

from __future__ import annotations

import os
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .classifier import DirectiveClassifier, discover_detectors
from .config import DirectiveCheckConfig, load_config
from .errors import FileReadError
from .locator import FileLocator, resolve_root
from .logging import get_logger
from .models import Classification, FileError, ScanReport


class DirectiveChecker:
    """Coordinates the locate -> classify flow for one project root."""

    def __init__(
        self,
        config: DirectiveCheckConfig | None = None,
        *,
        locator: FileLocator | None = None,
        classifier: DirectiveClassifier | None = None,
        workers: int | None = None,
    ) -> None:
        self.config = config
        self._locator = locator
        self._classifier = classifier
        self._workers = workers
        self.logger = get_logger("checker")

    def run(
        self,
        root: str | os.PathLike[str],
        *,
        cancel_event: threading.Event | None = None,
    ) -> ScanReport:
        """Scan ``root`` and return the sorted list of files missing the directive."""
        root_path = resolve_root(root)
        config = self.config or load_config(root_path)
        locator = self._locator or self._build_locator(config)
        classifier = self._classifier or self._build_classifier(config)
        workers = self._workers if self._workers is not None else config.scan.workers

        candidates = locator.locate(root_path)
        self.logger.info("Found %d candidate files under %s", len(candidates), root_path)

        report = ScanReport(root=root_path)
        if workers <= 1 or len(candidates) <= 1:
            self._run_sequential(classifier, candidates, report, cancel_event)
        else:
            self._run_pooled(classifier, candidates, report, cancel_event, workers)

        report.details.sort(key=lambda item: str(item.path))
        report.flagged = sorted(item.path for item in report.details if item.flagged)
        report.errors.sort(key=lambda item: str(item.path))
        if report.cancelled:
            self.logger.warning(
                "Scan cancelled after %d of %d files", report.files_scanned, len(candidates)
            )
        return report

    def _run_sequential(
        self,
        classifier: DirectiveClassifier,
        candidates: Sequence[Path],
        report: ScanReport,
        cancel_event: threading.Event | None,
    ) -> None:
        for path in candidates:
            if cancel_event is not None and cancel_event.is_set():
                report.cancelled = True
                return
            self._record(report, path, lambda: classifier.evaluate(path))

    def _run_pooled(
        self,
        classifier: DirectiveClassifier,
        candidates: Sequence[Path],
        report: ScanReport,
        cancel_event: threading.Event | None,
        workers: int,
    ) -> None:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="directivecheck") as pool:
            pending: Dict[Future[Classification], Path] = {
                pool.submit(_evaluate_unless_cancelled, classifier, path, cancel_event): path
                for path in candidates
            }
            while pending:
                done, _ = wait(pending, timeout=0.1, return_when=FIRST_COMPLETED)
                for future in done:
                    path = pending.pop(future)
                    self._record(report, path, future.result)
                if cancel_event is not None and cancel_event.is_set():
                    report.cancelled = True
                    for future in pending:
                        future.cancel()
                    return

    def _record(self, report: ScanReport, path: Path, produce) -> None:
        try:
            result: Optional[Classification] = produce()
        except FileReadError as exc:
            self.logger.warning("Skipping %s: %s", path, exc)
            report.errors.append(FileError(path=path, message=str(exc)))
            return
        if result is None:
            report.cancelled = True
            return
        report.files_scanned += 1
        report.details.append(result)

    @staticmethod
    def _build_locator(config: DirectiveCheckConfig) -> FileLocator:
        return FileLocator(
            config.exclude_dirs,
            config.extensions or None,
            follow_symlinks=config.scan.follow_symlinks,
            skip_unreadable=config.scan.skip_unreadable_dirs,
        )

    @staticmethod
    def _build_classifier(config: DirectiveCheckConfig) -> DirectiveClassifier:
        detectors = discover_detectors(config.detectors, config.signals)
        return DirectiveClassifier(detectors, server_functions=config.signals.server_functions)


def _evaluate_unless_cancelled(
    classifier: DirectiveClassifier,
    path: Path,
    cancel_event: threading.Event | None,
) -> Optional[Classification]:
    if cancel_event is not None and cancel_event.is_set():
        return None
    return classifier.evaluate(path)


def find_missing_directives(root: str | os.PathLike[str]) -> List[Path]:
    """Return sorted absolute paths of files under ``root`` that need the directive."""
    return DirectiveChecker().run(root).flagged


__all__ = ["DirectiveChecker", "find_missing_directives"]
