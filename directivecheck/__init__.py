"""Detect React/Next.js components that need a "use client" directive."""

from .checker import DirectiveChecker, find_missing_directives
from .classifier import DirectiveClassifier, classify
from .locator import FileLocator, locate

__all__ = [
    "DirectiveChecker",
    "DirectiveClassifier",
    "FileLocator",
    "classify",
    "find_missing_directives",
    "locate",
]
