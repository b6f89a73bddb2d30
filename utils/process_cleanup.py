"""
Kill browser-driver processes left behind by earlier runs.

Runs once per test process: the first call does the work, later calls
return the same result without touching the process table again.
"""
from __future__ import annotations

import threading
from typing import Iterable, List, Optional

import psutil

from utils.logger import logger

DEFAULT_DRIVER_NAMES = ("chromedriver", "msedgedriver", "geckodriver")

_lock = threading.Lock()
_killed: Optional[List[int]] = None


def _matches(process_name: str, names: Iterable[str]) -> bool:
    # Windows reports "chromedriver.exe"
    stem = process_name.lower()
    if stem.endswith(".exe"):
        stem = stem[:-4]
    return stem in names


def kill_stray_driver_processes(names: Optional[Iterable[str]] = None) -> List[int]:
    """Kill matching driver processes; returns the pids that were killed."""
    global _killed
    with _lock:
        if _killed is not None:
            return list(_killed)

        wanted = {n.lower() for n in (names or DEFAULT_DRIVER_NAMES)}
        killed: List[int] = []
        for proc in psutil.process_iter(["pid", "name"]):
            name = proc.info.get("name") or ""
            if not _matches(name, wanted):
                continue
            try:
                proc.kill()
                killed.append(proc.info["pid"])
                logger.info(f"Killed stray driver process {name} (pid={proc.info['pid']})")
            except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
                logger.warning(f"Failed to kill process '{name}': {e}")

        _killed = killed
        return list(killed)


def reset() -> None:
    """Forget the previous run (tests only)."""
    global _killed
    with _lock:
        _killed = None
