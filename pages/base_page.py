"""
BasePage - Page Object Pattern 基类

封装等待、点击、输入等通用页面操作，所有页面对象类应继承此类。
"""
from __future__ import annotations

import time
from enum import Enum
from typing import Any, Literal, Optional
from urllib.parse import urljoin

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page, Response

from config import settings
from utils.logger import logger
from utils.selector_helper import SelectorHelper, SelectorLike
from utils.waiting import wait_until

SCROLL_INTO_CENTER_JS = "el => el.scrollIntoView({block: 'center', inline: 'center'})"
SCRIPT_CLICK_JS = "el => el.click()"
READY_STATE_COMPLETE_JS = "() => document.readyState === 'complete'"

# Playwright 在元素被遮挡时的报错片段
_INTERCEPTED_MARKERS = ("intercepts pointer events", "element click intercepted")


class ClickMethod(Enum):
    NATIVE = "native"
    SCRIPT = "script"


def is_click_intercepted(error: BaseException) -> bool:
    """点击是否因元素被其它元素遮挡而失败"""
    message = str(error).lower()
    return any(marker in message for marker in _INTERCEPTED_MARKERS)


class BasePage:
    """页面对象基类 - 封装通用的页面操作方法"""

    def __init__(self, page: Page, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Args:
            page: Playwright Page 对象
            base_url: 基础 URL，默认取 settings.portfolio.base_url
            timeout: 元素等待超时（毫秒），默认取 settings.timeouts.element_wait
        """
        self.page = page
        self.base_url = base_url or settings.portfolio.base_url
        self.timeout = timeout or settings.timeouts.element_wait
        self.click_timeout = settings.timeouts.click
        self.poll_ms = settings.timeouts.poll
        self._load_time: Optional[float] = None

    # ==================== 导航相关方法 ====================

    def goto(self, url: str = "", timeout: Optional[int] = None, wait_until: str = "load") -> Optional[Response]:
        """
        导航到指定 URL（相对路径会拼接 base_url）

        Raises:
            PlaywrightTimeoutError: 导航超时
        """
        if not url.startswith(("http://", "https://")):
            url = urljoin(self.base_url, url)

        logger.info(f"Navigate to: {url}")
        start_time = time.time()
        response = self.page.goto(url, timeout=timeout or settings.timeouts.page_load, wait_until=wait_until)
        self._load_time = time.time() - start_time
        logger.info(f"Page loaded in {self._load_time:.2f}s")
        return response

    def wait_for_page_load(self, timeout: Optional[int] = None) -> None:
        """等待 document.readyState == 'complete'"""
        self.page.wait_for_function(READY_STATE_COMPLETE_JS, timeout=timeout or settings.timeouts.ready_state)

    def current_url(self) -> str:
        return self.page.url

    def title(self) -> str:
        return self.page.title()

    def html_lang(self) -> str:
        """<html lang> 属性值"""
        return str(self.page.evaluate("() => document.documentElement.lang || ''"))

    def evaluate(self, expression: str, arg: Any = None) -> Any:
        return self.page.evaluate(expression, arg)

    def sleep(self, ms: float) -> None:
        """让 Playwright 在等待期间继续分发事件"""
        self.page.wait_for_timeout(ms)

    # ==================== 元素定位与等待 ====================

    def resolve(self, selector: SelectorLike) -> Locator:
        """解析选择器并返回 Locator（不等待）"""
        return SelectorHelper.resolve_locator(self.page, selector)

    def wait_for(
        self,
        selector: SelectorLike,
        state: Literal["attached", "detached", "hidden", "visible"] = "visible",
        timeout: Optional[int] = None,
    ) -> Locator:
        """等待元素达到指定状态"""
        locator = self.resolve(selector)
        locator.wait_for(state=state, timeout=timeout or self.timeout)
        return locator

    def wait_for_visible(self, selector: SelectorLike, timeout: Optional[int] = None) -> Locator:
        return self.wait_for(selector, state="visible", timeout=timeout)

    def wait_until_clickable(self, selector: SelectorLike, timeout: Optional[int] = None) -> Locator:
        """
        等待元素可见且可用

        Raises:
            PlaywrightTimeoutError: 元素未在超时内可见
            WaitTimeoutError: 元素可见但一直处于 disabled
        """
        timeout = timeout or self.timeout
        start = time.monotonic()
        locator = self.wait_for(selector, state="visible", timeout=timeout)
        remaining = max(timeout - (time.monotonic() - start) * 1000, 0)
        wait_until(
            locator.is_enabled,
            remaining,
            self.poll_ms,
            sleep=self.sleep,
            description=f"{selector} enabled",
            raise_on_timeout=True,
        )
        return locator

    def scroll_into_center(self, locator: Locator) -> None:
        """滚动到视口中央，避免被固定导航栏等遮挡"""
        locator.evaluate(SCROLL_INTO_CENTER_JS)

    def is_visible(self, selector: SelectorLike) -> bool:
        return self.resolve(selector).is_visible()

    def text(self, selector: SelectorLike, timeout: Optional[int] = None) -> str:
        return self.wait_for_visible(selector, timeout).inner_text().strip()

    def get_attribute(self, selector: SelectorLike, name: str, timeout: Optional[int] = None) -> str:
        locator = self.wait_for(selector, state="attached", timeout=timeout)
        return (locator.get_attribute(name) or "").strip()

    def get_href(self, selector: SelectorLike, timeout: Optional[int] = None) -> str:
        """读取 href（去除首尾空白，缺失时返回空串）"""
        return self.get_attribute(selector, "href", timeout)

    # ==================== 点击操作 ====================

    def click(self, selector: SelectorLike, timeout: Optional[int] = None) -> ClickMethod:
        """
        健壮点击：等待可点击 → 滚动到视口中央 → 原生点击；
        若点击被遮挡则改用脚本点击。最多尝试两次，其它异常直接抛出。

        Returns:
            ClickMethod: 实际生效的点击方式
        """
        locator = self.wait_until_clickable(selector, timeout)
        self.scroll_into_center(locator)

        try:
            locator.click(timeout=self.click_timeout)
            logger.debug(f"Clicked element: {selector}")
            return ClickMethod.NATIVE
        except PlaywrightError as e:
            if not is_click_intercepted(e):
                raise
            logger.warning(f"Click intercepted on {selector}; falling back to script click")

        locator.evaluate(SCRIPT_CLICK_JS)
        return ClickMethod.SCRIPT

    # ==================== 输入操作 ====================

    def fill(self, selector: SelectorLike, value: str, timeout: Optional[int] = None) -> None:
        """
        填充输入框：等待可见 → 清空 → 逐字输入完整内容
        不重试，元素失效等异常直接抛出。
        """
        locator = self.wait_for_visible(selector, timeout)
        locator.clear(timeout=timeout or self.timeout)
        locator.press_sequentially(value, timeout=timeout or self.timeout)
        logger.debug(f"Filled {selector} with: {value[:50]}")

    def select_by_text(self, selector: SelectorLike, text: str, timeout: Optional[int] = None) -> None:
        """按可见文本选择下拉项"""
        self.click(selector, timeout)
        locator = self.wait_for_visible(selector, timeout)
        locator.select_option(label=text, timeout=timeout or self.timeout)
        logger.debug(f"Selected '{text}' in {selector}")
