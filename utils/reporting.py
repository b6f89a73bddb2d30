from __future__ import annotations

import json
import logging
from typing import Any

import allure

logger = logging.getLogger("automation")


def attach_to_allure(name: str, payload: Any, kind: str = "application/json") -> None:
    """Attach structured info to Allure; a reporting failure never fails the test."""
    try:
        if kind == "application/json":
            content = json.dumps(payload, ensure_ascii=False, indent=2, default=str)
            allure.attach(content, name=name, attachment_type=allure.attachment_type.JSON)
        else:
            allure.attach(str(payload), name=name, attachment_type=allure.attachment_type.TEXT)
    except Exception:
        logger.debug("Allure attach failed for %s", name, exc_info=True)
