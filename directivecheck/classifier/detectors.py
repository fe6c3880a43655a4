"""Built-in detectors for the four client-usage signals."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence, Tuple

from ..models import SignalMatch
from .base import SignalDetector
from .constants import CLIENT_EVENTS, CLIENT_GLOBALS, DYNAMIC_FUNCTIONS, HOOKS
from .text import PreparedSource


class SubstringDetector(SignalDetector):
    """Matches any catalog entry as a plain substring of the stripped code."""

    default_tokens: Tuple[str, ...] = ()

    def __init__(self, extra_tokens: Iterable[str] = ()) -> None:
        self.tokens = _merge(self.default_tokens, extra_tokens)

    def detect(self, source: PreparedSource) -> Optional[SignalMatch]:
        for token in self.tokens:
            if token in source.code:
                return SignalMatch(detector=self.name, token=token)
        return None


class HookDetector(SubstringDetector):
    """React hook calls; no word boundaries, so ``useStateMachine`` also matches."""

    name = "hooks"
    default_tokens = HOOKS


class ClientEventDetector(SubstringDetector):
    name = "events"
    default_tokens = CLIENT_EVENTS


class DynamicFunctionDetector(SubstringDetector):
    name = "dynamic"
    default_tokens = DYNAMIC_FUNCTIONS


class ClientGlobalDetector(SignalDetector):
    """Browser globals as whole words, ignoring occurrences inside string literals."""

    name = "globals"

    def __init__(self, extra_tokens: Iterable[str] = ()) -> None:
        self.tokens = _merge(CLIENT_GLOBALS, extra_tokens)
        alternatives = "|".join(re.escape(token) for token in self.tokens)
        self._pattern = re.compile(rf"\b({alternatives})\b")

    def detect(self, source: PreparedSource) -> Optional[SignalMatch]:
        match = self._pattern.search(source.code_without_literals)
        if match is None:
            return None
        return SignalMatch(detector=self.name, token=match.group(1))


def _merge(defaults: Sequence[str], extra: Iterable[str]) -> Tuple[str, ...]:
    merged = list(defaults)
    for token in extra:
        if token and token not in merged:
            merged.append(token)
    return tuple(merged)


__all__ = [
    "ClientEventDetector",
    "ClientGlobalDetector",
    "DynamicFunctionDetector",
    "HookDetector",
    "SubstringDetector",
]
