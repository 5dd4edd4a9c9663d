"""
Condition names shared by the configuration layer and the condition engine.
"""

from enum import Enum
from typing import Iterable, List


class ConditionName(str, Enum):
    """Removal criteria understood by the engine."""
    UNCOMMENTED = "uncommented"
    UNLIKED = "unliked"
    TEXT = "text"
    IMAGES = "images"
    VIDEOS = "videos"
    CONTAINS_STRINGS = "containsStrings"

    def __str__(self) -> str:
        return self.value


def parse_condition_names(values: Iterable[str]) -> List[ConditionName]:
    """Convert raw strings into condition names, raising ValueError on unknown names."""
    names = []
    for value in values:
        try:
            names.append(ConditionName(value.strip()))
        except ValueError:
            allowed = ", ".join(name.value for name in ConditionName)
            raise ValueError(f"Unknown condition '{value}'. Valid conditions: {allowed}")
    return names
