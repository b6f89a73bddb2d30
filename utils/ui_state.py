"""Theme toggle snapshot and its comparison rules."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict, List


@dataclass(frozen=True)
class ThemeUiState:
    """Text and class of the theme button plus the effective page background."""
    text: str
    css_class: str
    background_color: str

    def diff(self, other: "ThemeUiState") -> List[str]:
        """Names of the fields whose values differ from ``other``."""
        return [f.name for f in fields(self) if getattr(self, f.name) != getattr(other, f.name)]

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def theme_changed(before: ThemeUiState, after: ThemeUiState) -> bool:
    """True when at least one field differs."""
    return bool(before.diff(after))


def theme_reverted(original: ThemeUiState, current: ThemeUiState) -> bool:
    """True when all three fields match the original."""
    return original == current
