"""Directive classifier, signal detectors and detector discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, List, Sequence, Set

from ..config import SignalConfig
from ..logging import get_logger
from .base import SignalDetector
from .core import DirectiveClassifier, classify
from .detectors import (
    ClientEventDetector,
    ClientGlobalDetector,
    DynamicFunctionDetector,
    HookDetector,
)

_ENTRY_POINT_GROUP = "directivecheck.detectors"

logger = get_logger("classifier")


def _builtin_factories(signals: SignalConfig) -> dict[str, Callable[[], SignalDetector]]:
    return {
        "hooks": lambda: HookDetector(signals.hooks),
        "globals": lambda: ClientGlobalDetector(signals.client_globals),
        "events": lambda: ClientEventDetector(signals.client_events),
        "dynamic": lambda: DynamicFunctionDetector(signals.dynamic_functions),
    }


def discover_detectors(
    enabled: Sequence[str] | None = None,
    signals: SignalConfig | None = None,
) -> List[SignalDetector]:
    """Build the detectors a scan should run.

    Built-in detectors come first, in catalog order, followed by detectors
    registered under the ``directivecheck.detectors`` entry-point group.
    When ``enabled`` is given only those names are built, and plugins that
    are not enabled are never imported.
    """
    wanted = None if enabled is None else {name.lower() for name in enabled}
    builtins = _builtin_factories(signals or SignalConfig())

    detectors: List[SignalDetector] = []
    for name, factory in builtins.items():
        if wanted is None or name in wanted:
            detectors.append(factory())

    plugin_names: Set[str] = set()
    for entry in metadata.entry_points(group=_ENTRY_POINT_GROUP):
        name = entry.name.lower()
        if name in builtins or name in plugin_names:
            logger.debug("Ignoring duplicate detector plugin %s", entry.name)
            continue
        plugin_names.add(name)
        if wanted is not None and name not in wanted:
            continue
        detectors.append(_load_plugin(entry, name))

    if wanted is not None:
        unknown = wanted - set(builtins) - plugin_names
        if unknown:
            raise ValueError(f"Unknown detectors requested: {', '.join(sorted(unknown))}")
    return detectors


def _load_plugin(entry: metadata.EntryPoint, name: str) -> SignalDetector:
    try:
        target = entry.load()
    except Exception as exc:
        raise RuntimeError(f"Detector plugin '{entry.name}' failed to import: {exc}") from exc

    if isinstance(target, SignalDetector):
        detector = target
    elif callable(target):
        detector = target()
    else:
        detector = None
    if not isinstance(detector, SignalDetector):
        raise TypeError(
            f"Detector plugin '{entry.name}' must provide a SignalDetector subclass, instance or factory"
        )
    if not detector.name:
        detector.name = name
    return detector


__all__ = [
    "DirectiveClassifier",
    "SignalDetector",
    "classify",
    "discover_detectors",
]
