"""Presenter implementations for output handling."""

from .console_presenter import ConsolePresenter, ConsoleProgressCallback
from .null_presenter import NullPresenter, NullProgressCallback

__all__ = [
    "ConsolePresenter",
    "ConsoleProgressCallback",
    "NullPresenter",
    "NullProgressCallback",
]
