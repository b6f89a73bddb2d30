import re
import sys
import warnings
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from config import settings
from utils.data.yaml_cases_loader import InvalidYamlFormatError, load_yaml_file
from utils.logger import reconfigure as reconfigure_logger
from utils.process_cleanup import kill_stray_driver_processes


# ==================== 命令行选项与标记 ====================
def pytest_addoption(parser):
    group = parser.getgroup("portfolio")
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="运行访问真实站点的浏览器用例（默认跳过）",
    )
    group.addoption(
        "--config-overrides",
        default="",
        help='覆盖配置，如 "browser.type=firefox,timeouts.click=3000"',
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "yaml_data(file, group): 从 test_data/<file> 的用例组参数化")
    config.addinivalue_line("markers", "e2e: 需要真实浏览器与网络的端到端用例")
    overrides = config.getoption("--config-overrides")
    if overrides:
        settings.apply_overrides(overrides)
        # 日志器在导入时已按旧配置创建
        reconfigure_logger()


def pytest_sessionstart(session):
    """每个测试进程只清理一次残留驱动进程"""
    if session.config.getoption("--run-e2e") and settings.cleanup.enabled:
        kill_stray_driver_processes(settings.cleanup.process_names)


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="端到端用例需要 --run-e2e")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


# ==================== 浏览器会话 ====================
@pytest.fixture(scope="session")
def playwright_instance():
    with sync_playwright() as p:
        yield p


def _launch_browser(playwright_instance, cfg):
    """按 BrowserConfig 启动浏览器；启动失败即让用例失败"""
    launch_options: Dict[str, Any] = {"headless": cfg.headless}
    if cfg.channel:
        launch_options["channel"] = cfg.channel
    if cfg.type == "chromium" and cfg.args:
        launch_options["args"] = list(cfg.args)

    try:
        instance = getattr(playwright_instance, cfg.type).launch(**launch_options)
    except PlaywrightError as e:
        # 只有 --run-e2e 时才会用到浏览器，启动失败即视为失败
        pytest.fail(f"浏览器无法启动 ({cfg.type}): {e}", pytrace=False)
    return instance


@pytest.fixture(scope="session")
def browser(playwright_instance):
    """整个会话共用一个浏览器进程；每个用例独占一个 context"""
    instance = _launch_browser(playwright_instance, settings.browser)
    yield instance
    instance.close()


@pytest.fixture
def page(browser):
    context = browser.new_context(viewport=dict(settings.browser.viewport))
    context.set_default_navigation_timeout(settings.timeouts.page_load)
    context.set_default_timeout(settings.timeouts.element_wait)
    page = context.new_page()
    yield page
    context.close()


@pytest.fixture
def home_page(page):
    from pages.home_page import HomePage

    home = HomePage(page)
    home.open()
    return home


# ==================== 安全的YAML加载（带缓存） ====================
@lru_cache(maxsize=128)
def _cached_load_yaml(file_path_str: str) -> Dict[str, List[Dict[str, Any]]]:
    return load_yaml_file(Path(file_path_str))


def _extract_yaml_param_names(metafunc, first_case: Dict[str, Any]) -> List[str]:
    """测试函数参数名必须与YAML字段名完全一致"""
    yaml_fields = set(first_case.keys()) if first_case else set()
    param_names = [p for p in metafunc.fixturenames if p in yaml_fields]

    if not param_names and yaml_fields:
        _raise_usage_error(
            metafunc,
            f"测试函数参数与YAML字段无匹配\n"
            f"  YAML字段: {sorted(yaml_fields)}\n"
            f"  测试参数: {sorted(metafunc.fixturenames)}"
        )
    return param_names


def _case_id(case: Dict[str, Any], group_name: str, idx: int) -> str:
    case_id = str(case.get("id", "")) or str(case.get("desc", "")) or f"{group_name}_{idx}"
    case_id = re.sub(r'[^a-zA-Z0-9_]', '_', case_id)
    case_id = re.sub(r'_+', '_', case_id).strip('_')
    if not case_id or not case_id[0].isalpha():
        case_id = f"{group_name}_{idx}"
    return case_id[:100]


def pytest_generate_tests(metafunc):
    """@pytest.mark.yaml_data(file=..., group=...) 动态参数化"""
    marker = metafunc.definition.get_closest_marker("yaml_data")
    if marker is None:
        return

    try:
        file_name = marker.kwargs["file"]
        group_name = marker.kwargs["group"]
    except KeyError as e:
        _raise_usage_error(
            metafunc,
            f"@pytest.mark.yaml_data 缺少必需参数 {e}\n"
            f"  正确用法: @pytest.mark.yaml_data(file='xxx.yaml', group='yyy')"
        )
        return

    abs_file_path = Path(settings.project_root) / "test_data" / file_name
    if not abs_file_path.exists():
        _warn_and_skip(metafunc, f"YAML数据文件不存在，跳过测试: {abs_file_path}")
        _parametrize_empty(metafunc)
        return

    try:
        res = _cached_load_yaml(str(abs_file_path))
    except InvalidYamlFormatError as e:
        _raise_usage_error(metafunc, f"YAML数据格式验证失败，测试终止:\n{e}")
        return

    cases = res.get(group_name)
    if not cases:
        _warn_and_skip(
            metafunc,
            f"YAML中不存在用例组 '{group_name}'，跳过测试。可用组: {list(res.keys()) or '[空]'}"
        )
        _parametrize_empty(metafunc)
        return

    param_names = _extract_yaml_param_names(metafunc, cases[0])

    param_values: List[Tuple[Any, ...]] = []
    param_ids: List[str] = []
    for idx, case in enumerate(cases):
        if any(p not in case for p in param_names):
            continue  # 跳过字段缺失的用例
        param_values.append(tuple(case[p] for p in param_names))
        param_ids.append(_case_id(case, group_name, idx))

    if not param_values:
        _warn_and_skip(metafunc, f"用例组 '{group_name}' 无有效用例，所需参数: {param_names}")
        _parametrize_empty(metafunc)
        return

    metafunc.parametrize(",".join(param_names), param_values, ids=param_ids, scope="function")


# ==================== 辅助函数 ====================
def _raise_usage_error(metafunc, message: str) -> None:
    raise pytest.UsageError(f"[YAML数据错误] in {metafunc.definition.nodeid}\n{message}")


def _warn_and_skip(metafunc, message: str) -> None:
    """收集阶段不能 pytest.skip()，改为告警 + 空参数化"""
    full_message = f"[YAML数据] in {metafunc.definition.nodeid}\n{message}"
    warnings.warn(full_message, UserWarning, stacklevel=2)
    print(f"\nYAML数据跳过 [{metafunc.definition.nodeid}]:\n{message}", file=sys.stderr)


def _parametrize_empty(metafunc) -> None:
    """参数化空列表，pytest 会将用例标记为 skipped"""
    safe_params = [
        p for p in metafunc.fixturenames
        if p.isidentifier() and not p.startswith("_") and p != "request"
    ]
    param_name = safe_params[0] if safe_params else "yaml_skip_marker"
    metafunc.parametrize(param_name, [], ids=[], scope="function")
