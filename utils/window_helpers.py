from __future__ import annotations

import logging
from typing import Iterable, Optional

from playwright.sync_api import Page

from utils.waiting import wait_until

logger = logging.getLogger("automation")


def _new_pages(page: Page, known: Iterable[Page]) -> list:
    known = list(known)
    return [p for p in page.context.pages if all(p is not k for k in known)]


def switch_to_new_page_if_any(
    page: Page,
    known_pages: Iterable[Page],
    timeout_ms: int = 5000,
    poll_ms: int = 100,
) -> Optional[Page]:
    """
    Wait for a page that is not in ``known_pages`` to appear in the same
    browser context and bring it to front.

    Returns the new page, or None when nothing opened before the timeout.
    Polls through ``page.wait_for_timeout`` so popup events are dispatched.
    """
    known = list(known_pages)
    result = wait_until(
        lambda: bool(_new_pages(page, known)),
        timeout_ms,
        poll_ms,
        sleep=lambda ms: page.wait_for_timeout(ms),
        description="new browsing context",
    )
    if not result:
        logger.debug(f"No new page within {timeout_ms}ms")
        return None

    new_page = _new_pages(page, known)[0]
    new_page.bring_to_front()
    return new_page
