from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from playwright.sync_api import Locator, Page

from utils.exceptions import SelectorResolutionError

logger = logging.getLogger("automation")


@dataclass(frozen=True)
class Selector:
    """
    Static, immutable description of one DOM node.

    Exactly one strategy is used, in this order: element id, css, xpath.
    """
    id: Optional[str] = None
    css: Optional[str] = None
    xpath: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def by_id(cls, element_id: str, description: Optional[str] = None) -> "Selector":
        return cls(id=element_id, description=description)

    @classmethod
    def by_xpath(cls, xpath: str, description: Optional[str] = None) -> "Selector":
        return cls(xpath=xpath, description=description)

    @classmethod
    def by_css(cls, css: str, description: Optional[str] = None) -> "Selector":
        return cls(css=css, description=description)

    def to_playwright(self) -> str:
        """Selector string understood by ``page.locator()``."""
        if self.id:
            return f"id={self.id}"
        if self.css:
            return self.css
        if self.xpath:
            return f"xpath={self.xpath}"
        raise SelectorResolutionError(f"Selector has no strategy: {self}")

    def __str__(self) -> str:
        strategy = self.id or self.css or self.xpath
        return f"{self.description} ({strategy})" if self.description else str(strategy)


SelectorLike = Union[Selector, str, Locator]


class SelectorHelper:
    @staticmethod
    def resolve_locator(page: Page, selector: SelectorLike) -> Locator:
        """
        Resolve to a Locator WITHOUT waiting.

        Accepts a Selector, a raw Playwright selector string, or a Locator
        (returned as-is).
        """
        if isinstance(selector, Locator):
            return selector
        if isinstance(selector, Selector):
            return page.locator(selector.to_playwright())
        if isinstance(selector, str):
            if not selector.strip():
                raise SelectorResolutionError("Empty selector string")
            return page.locator(selector)
        raise SelectorResolutionError(f"Unsupported selector type: {type(selector).__name__}")
