"""Host extraction and allow-list assertions for outbound links."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable
from urllib.parse import urlparse

from utils.exceptions import InvalidLinkError

if TYPE_CHECKING:
    from utils.link_resolver import LinkResolution

logger = logging.getLogger("automation")


def host_of(url: str) -> str:
    """Lower-cased host name of ``url``."""
    host = urlparse((url or "").strip()).hostname
    if not host:
        raise InvalidLinkError(f"URL has no host: {url!r}")
    return host.lower()


def host_allowed(host: str, allowed: Iterable[str]) -> bool:
    """True when ``host`` is an allowed entry or a subdomain of one."""
    host = (host or "").lower().rstrip(".")
    for entry in allowed:
        entry = entry.lower().rstrip(".")
        if host == entry or host.endswith("." + entry):
            return True
    return False


def assert_external_link(
    href: str,
    allowed: Iterable[str],
    open_and_resolve: Callable[[str], LinkResolution],
) -> LinkResolution:
    """
    Check a declared href and the host it finally lands on.

    Both the host in ``href`` and the resolved host after redirects must be
    in ``allowed``. Raises AssertionError otherwise.
    """
    allowed = sorted(set(allowed))
    assert href, "Element has no href."

    href_host = host_of(href)
    assert host_allowed(href_host, allowed), (
        f"Href host '{href_host}' not in allowed [{', '.join(allowed)}]."
    )

    resolution = open_and_resolve(href)
    assert host_allowed(resolution.final_host, allowed), (
        f"Final host '{resolution.final_host}' not in allowed [{', '.join(allowed)}]."
    )
    logger.info(f"External link ok: {href_host} -> {resolution.final_host}")
    return resolution
