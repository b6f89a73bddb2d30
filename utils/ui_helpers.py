"""
DOM helpers that read or nudge rendered state: effective background color,
theme markers and native form validation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from playwright.sync_api import Locator, Page

from utils.waiting import WaitResult, wait_until

logger = logging.getLogger("automation")

EFFECTIVE_BG_COLOR_JS = """
() => {
    const x = Math.floor(window.innerWidth / 2);
    const y = Math.floor(window.innerHeight / 2);
    let el = document.elementFromPoint(x, y) || document.body;
    const transparent = ['rgba(0, 0, 0, 0)', 'transparent'];
    while (el) {
        const bg = window.getComputedStyle(el).backgroundColor;
        if (bg && !transparent.includes(bg)) return bg;
        el = el.parentElement;
    }
    return window.getComputedStyle(document.body).backgroundColor;
}
"""

THEME_MARKER_JS = """
() => document.documentElement.getAttribute('data-bs-theme')
      || (document.body && document.body.getAttribute('data-bs-theme'))
      || null
"""

THEME_STORAGE_JS = """
() => {
    const keys = ['theme', 'color-scheme', 'preferredTheme'];
    for (const k of keys) {
        const v = window.localStorage.getItem(k);
        if (v) return v.toString();
    }
    return null;
}
"""

THEME_DARK_CLASS_JS = """
() => document.documentElement.classList.contains('dark')
      || (!!document.body && document.body.classList.contains('dark'))
"""

SET_THEME_JS = """
(theme) => {
    document.documentElement.setAttribute('data-bs-theme', theme);
    document.body.setAttribute('data-bs-theme', theme);
    try { window.localStorage.setItem('theme', theme); } catch (e) {}
    for (const el of [document.documentElement, document.body]) {
        el.classList.remove('dark', 'light');
        el.classList.add(theme);
    }
}
"""


def get_effective_bg_color(page: Page) -> str:
    """First non-transparent background color from the viewport center upwards."""
    color = page.evaluate(EFFECTIVE_BG_COLOR_JS)
    return str(color) if color is not None else ""


def _normalize_theme(value: Optional[str]) -> str:
    return "dark" if "dark" in (value or "").lower() else "light"


def get_theme(page: Page) -> str:
    """
    Current theme as "dark" or "light".

    Looks at ``data-bs-theme`` on <html>/<body>, then well-known
    localStorage keys, then a ``dark`` class; defaults to light.
    """
    marker = page.evaluate(THEME_MARKER_JS)
    if marker and str(marker).strip():
        return str(marker).strip().lower()

    stored = page.evaluate(THEME_STORAGE_JS)
    if stored and str(stored).strip():
        lowered = str(stored).lower()
        if "dark" in lowered:
            return "dark"
        if "light" in lowered:
            return "light"

    return "dark" if page.evaluate(THEME_DARK_CLASS_JS) else "light"


def set_theme(page: Page, theme: str) -> str:
    """Force a theme through the same markers get_theme() reads."""
    normalized = _normalize_theme(theme)
    page.evaluate(SET_THEME_JS, normalized)
    logger.debug(f"Theme forced to {normalized}")
    return normalized


def _page_sleep(page: Page) -> Callable[[float], None]:
    return lambda ms: page.wait_for_timeout(ms)


def wait_for_theme_to_be(page: Page, expected: str, timeout_ms: int = 3000, poll_ms: int = 50) -> WaitResult:
    expected = (expected or "").lower()
    return wait_until(
        lambda: get_theme(page).lower() == expected,
        timeout_ms,
        poll_ms,
        sleep=_page_sleep(page),
        description=f"theme == {expected}",
    )


def wait_for_theme_to_change(page: Page, before: str, timeout_ms: int = 3000, poll_ms: int = 50) -> WaitResult:
    before = (before or "").lower()
    return wait_until(
        lambda: get_theme(page).lower() != before,
        timeout_ms,
        poll_ms,
        sleep=_page_sleep(page),
        description=f"theme != {before}",
    )


# ---- native form validation ----

@dataclass(frozen=True)
class FieldValidity:
    value_missing: bool
    type_mismatch: bool
    message: str

    @property
    def invalid(self) -> bool:
        return self.value_missing or self.type_mismatch


def is_invalid(locator: Locator) -> bool:
    """True when the browser's constraint validation rejects the field."""
    return not locator.evaluate("el => el.checkValidity()")


def get_validity(locator: Locator) -> FieldValidity:
    data = locator.evaluate(
        "el => ({valueMissing: el.validity.valueMissing,"
        " typeMismatch: el.validity.typeMismatch,"
        " message: el.validationMessage || ''})"
    )
    return FieldValidity(
        value_missing=bool(data.get("valueMissing")),
        type_mismatch=bool(data.get("typeMismatch")),
        message=str(data.get("message") or ""),
    )


def report_validity(locator: Locator) -> bool:
    """Ask the browser to show its validation bubble; returns checkValidity()."""
    return bool(locator.evaluate("el => el.reportValidity()"))
