"""
作品集首页页面对象
"""
from typing import Optional

from playwright.sync_api import Locator, Page

from config import settings
from config.external_links import get_allowed_hosts
from pages import home_selector as sel
from pages.base_page import BasePage
from utils.data import ContactDataGenerator, ContactFormData
from utils.link_helpers import assert_external_link
from utils.link_resolver import ExternalLinkResolver, LinkResolution
from utils.logger import log_step, logger
from utils.reporting import attach_to_allure
from utils.selector_helper import Selector, SelectorLike
from utils.ui_helpers import FieldValidity, get_effective_bg_color, get_validity, is_invalid
from utils.ui_state import ThemeUiState, theme_changed, theme_reverted
from utils.waiting import WaitResult, wait_until


class HomePage(BasePage):
    """作品集首页"""

    THEME_READY_TIMEOUT = 10000
    MODAL_TIMEOUT = 10000

    def __init__(self, page: Page, base_url: Optional[str] = None, timeout: Optional[int] = None):
        super().__init__(page, base_url, timeout)
        self._data = ContactDataGenerator()

    # ===== 导航 =====

    @log_step("Open portfolio home")
    def open(self) -> None:
        """打开首页并等待加载完成"""
        self.goto(self.base_url)
        self.wait_for_page_load()

    def _navigate(self, selector: Selector) -> None:
        self.click(selector)
        self.wait_for_page_load()

    def go_to_repositories(self) -> None:
        self._navigate(sel.nav_repositories)

    def go_to_testimonials(self) -> None:
        self._navigate(sel.nav_testimonials)

    def go_home_via_brand(self) -> None:
        self._navigate(sel.nav_brand)

    @log_step("Select language")
    def select_language(self, language_text: str) -> None:
        """在语言下拉框中按可见文本选择语言"""
        self.select_by_text(sel.language_select, language_text)

    # ===== 主题切换 =====

    def _wait_theme_button_ready(self, timeout: Optional[int] = None) -> Locator:
        timeout = timeout or self.THEME_READY_TIMEOUT
        button = self.wait_for(sel.theme_toggle, state="attached", timeout=timeout)
        self.scroll_into_center(button)
        return self.wait_until_clickable(sel.theme_toggle, timeout)

    def _read_theme_ui_state(self, button: Optional[Locator] = None) -> ThemeUiState:
        button = button or self.resolve(sel.theme_toggle)
        return ThemeUiState(
            text=(button.inner_text() or "").strip(),
            css_class=button.get_attribute("class") or "",
            background_color=get_effective_bg_color(self.page),
        )

    def get_theme_ui_state(self) -> ThemeUiState:
        """按钮文本、class 与视口中心的有效背景色"""
        state = self._read_theme_ui_state(self._wait_theme_button_ready())
        if settings.allure.attach_snapshots:
            attach_to_allure("theme_ui_state", state.to_dict())
        return state

    @log_step("Toggle theme")
    def toggle_theme(self) -> None:
        self._wait_theme_button_ready()
        self.click(sel.theme_toggle)

    def wait_theme_ui_changed(self, before: ThemeUiState, timeout_ms: Optional[int] = None) -> WaitResult:
        """等待任一字段与 before 不同"""
        return wait_until(
            lambda: theme_changed(before, self._read_theme_ui_state()),
            timeout_ms or settings.timeouts.theme_change,
            self.poll_ms,
            sleep=self.sleep,
            description="theme UI changed",
        )

    def wait_theme_ui_reverted(self, original: ThemeUiState, timeout_ms: Optional[int] = None) -> WaitResult:
        """等待三个字段全部回到 original"""
        return wait_until(
            lambda: theme_reverted(original, self._read_theme_ui_state()),
            timeout_ms or settings.timeouts.theme_change,
            self.poll_ms,
            sleep=self.sleep,
            description="theme UI reverted",
        )

    # ===== 联系表单 =====

    def open_contact_form(self) -> Locator:
        """点击邮件按钮并等待弹窗出现"""
        self.click(sel.contact_email_button)
        return self.wait_for_visible(sel.contact_modal, self.MODAL_TIMEOUT)

    def submit_contact_form(self, name: str, email: str, message: str) -> None:
        self.click(sel.contact_email_button)
        self.fill(sel.contact_name_input, name)
        self.fill(sel.contact_email_input, email)
        self.fill(sel.contact_message_input, message)
        self.click(sel.contact_send_button)

    @log_step("Submit empty contact form")
    def submit_empty_contact_form(self) -> None:
        self.click(sel.contact_email_button)
        self.click(sel.contact_send_button)

    @log_step("Submit contact form with invalid email")
    def submit_invalid_contact_form(self, data: Optional[ContactFormData] = None) -> ContactFormData:
        data = data or self._data.invalid_email_contact()
        self.submit_contact_form(data.name, data.email, data.message)
        return data

    @log_step("Submit valid contact form")
    def submit_valid_contact_form(self, data: Optional[ContactFormData] = None) -> ContactFormData:
        data = data or self._data.valid_contact()
        self.submit_contact_form(data.name, data.email, data.message)
        return data

    def is_field_invalid(self, selector: SelectorLike) -> bool:
        """浏览器原生校验是否判定字段非法"""
        return is_invalid(self.wait_for(selector, state="attached"))

    def field_validity(self, selector: SelectorLike) -> FieldValidity:
        return get_validity(self.wait_for(selector, state="attached"))

    # ===== 外链 =====

    def resolve_external_link(self, href: str) -> LinkResolution:
        resolver = ExternalLinkResolver(
            self.page,
            timeout_ms=settings.timeouts.link_resolution,
            load_timeout_ms=settings.timeouts.page_load,
        )
        return resolver.resolve(href)

    def open_external_and_get_final_host(self, href: str) -> str:
        """打开外链并返回跳转完成后的主机名，结束后回到原页面"""
        return self.resolve_external_link(href).final_host

    @log_step("Check external link")
    def check_external_link(self, link_id: str) -> LinkResolution:
        """校验外链声明的主机与最终落地主机均在白名单内"""
        allowed = get_allowed_hosts(link_id)
        href = self.get_href(Selector.by_id(link_id))
        logger.info(f"Checking {link_id}: {href}")
        return assert_external_link(href, allowed, self.resolve_external_link)
