"""
Follow an outbound link and report the host it lands on.

The walk through one link check is explicit:

    IDLE -> HREF_READ -> NAVIGATING -> RESOLVED [-> CLEANED_UP]

and the resolver returns the final state together with the transitions it
went through, instead of leaving callers to infer what happened from the
number of open pages.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from playwright.sync_api import Page

from utils.exceptions import InvalidLinkError
from utils.link_helpers import host_of
from utils.reporting import attach_to_allure
from utils.waiting import wait_until
from utils.window_helpers import switch_to_new_page_if_any

logger = logging.getLogger("automation")

OPEN_IN_NEW_CONTEXT_JS = "href => { window.open(href, '_blank'); }"
BLANK_URLS = ("", "about:blank")


class LinkState(Enum):
    IDLE = "idle"
    HREF_READ = "href_read"
    NAVIGATING = "navigating"
    RESOLVED = "resolved"
    CLEANED_UP = "cleaned_up"


class NavigationMode(Enum):
    NEW_CONTEXT = "new_context"
    IN_PLACE = "in_place"


@dataclass(frozen=True)
class LinkResolution:
    href: str
    final_url: str
    final_host: str
    mode: NavigationMode
    state: LinkState
    transitions: Tuple[LinkState, ...] = field(default_factory=tuple)

    @property
    def opened_new_context(self) -> bool:
        return self.mode is NavigationMode.NEW_CONTEXT

    def to_dict(self) -> dict:
        return {
            "href": self.href,
            "final_url": self.final_url,
            "final_host": self.final_host,
            "mode": self.mode.value,
            "state": self.state.value,
            "transitions": [s.value for s in self.transitions],
        }


class ExternalLinkResolver:
    """Open an href in a new page (or in place as a fallback) and read its final host."""

    def __init__(
        self,
        page: Page,
        timeout_ms: int = 7000,
        poll_ms: int = 100,
        load_timeout_ms: Optional[int] = None,
    ):
        self.page = page
        self.timeout_ms = timeout_ms
        self.poll_ms = poll_ms
        self.load_timeout_ms = load_timeout_ms or timeout_ms
        self._transitions: List[LinkState] = []

    @property
    def state(self) -> LinkState:
        return self._transitions[-1] if self._transitions else LinkState.IDLE

    def _advance(self, state: LinkState) -> None:
        logger.debug(f"Link check: {self.state.value} -> {state.value}")
        self._transitions.append(state)

    def resolve(self, href: str) -> LinkResolution:
        self._transitions = [LinkState.IDLE]

        href = (href or "").strip()
        if not href:
            raise InvalidLinkError("Cannot resolve an empty href")
        self._advance(LinkState.HREF_READ)

        original = self.page
        known_pages = list(original.context.pages)

        self._advance(LinkState.NAVIGATING)
        original.evaluate(OPEN_IN_NEW_CONTEXT_JS, href)
        new_page = switch_to_new_page_if_any(original, known_pages, self.timeout_ms, self.poll_ms)

        try:
            if new_page is not None:
                mode = NavigationMode.NEW_CONTEXT
                target = new_page
            else:
                logger.info(f"No new page opened for {href}; navigating in place")
                mode = NavigationMode.IN_PLACE
                target = original
                original.goto(href, wait_until="load", timeout=self.load_timeout_ms)

            self._wait_for_landing(target)
            final_url = target.url
            final_host = host_of(final_url)
            self._advance(LinkState.RESOLVED)
        finally:
            if new_page is not None:
                self._close_and_return(new_page, original)

        if new_page is not None:
            self._advance(LinkState.CLEANED_UP)

        resolution = LinkResolution(
            href=href,
            final_url=final_url,
            final_host=final_host,
            mode=mode,
            state=self.state,
            transitions=tuple(self._transitions),
        )
        logger.info(f"Resolved {href} -> {final_host} ({mode.value})")
        attach_to_allure("link_resolution", resolution.to_dict())
        return resolution

    def _wait_for_landing(self, target: Page) -> None:
        """Wait for the load event and for the page to leave about:blank."""
        target.wait_for_load_state("load", timeout=self.load_timeout_ms)
        wait_until(
            lambda: target.url not in BLANK_URLS,
            self.load_timeout_ms,
            self.poll_ms,
            sleep=lambda ms: target.wait_for_timeout(ms),
            description="navigation away from about:blank",
            raise_on_timeout=True,
        )

    @staticmethod
    def _close_and_return(new_page: Page, original: Page) -> None:
        try:
            new_page.close()
        finally:
            original.bring_to_front()
