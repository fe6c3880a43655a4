"""Base classes for client-signal detector plugins."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import SignalMatch
from .text import PreparedSource


class SignalDetector(ABC):
    """Contract for detectors that report client-only usage in a file."""

    name: str = ""

    @abstractmethod
    def detect(self, source: PreparedSource) -> Optional[SignalMatch]:
        """Return the first matching signal, or None when the file shows no usage."""
