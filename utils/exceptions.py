from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from utils.waiting import WaitResult


class AutomationError(Exception):
    """Base error for the page-automation layer."""


class WaitTimeoutError(AutomationError):
    """Raised by wait_until(raise_on_timeout=True) when the deadline passes."""

    def __init__(self, message: str, result: "WaitResult"):
        super().__init__(message)
        self.result = result


class InvalidLinkError(AutomationError):
    """Raised when an href cannot be parsed into a host."""


class SelectorError(AutomationError):
    """Base selector-related error."""


class SelectorResolutionError(SelectorError):
    """Raised when a Selector carries no usable locator strategy."""
