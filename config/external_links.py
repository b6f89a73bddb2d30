"""
外链白名单

key 为页面元素 id，value 为该链接允许落地的主机名集合。
声明的 href 与跟随跳转后的最终主机都必须命中同一集合。
"""
from types import MappingProxyType
from typing import FrozenSet, Mapping

ALLOWED_HOSTS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    "btn-contact-linkedin": frozenset({"linkedin.com", "www.linkedin.com"}),
    "btn-contact-github": frozenset({"github.com", "www.github.com"}),
    "btn-contact-whatsapp": frozenset({"wa.me", "api.whatsapp.com"}),
})


def get_allowed_hosts(link_id: str) -> FrozenSet[str]:
    """返回链接的白名单；未登记的链接抛出 KeyError"""
    try:
        return ALLOWED_HOSTS[link_id]
    except KeyError:
        raise KeyError(
            f"未登记的外链: {link_id}，已登记: {sorted(ALLOWED_HOSTS)}"
        ) from None
