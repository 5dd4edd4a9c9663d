"""
Configuration Models

Pydantic models for the filter rule set. Field aliases mirror the camelCase
keys of the original user-script configuration so existing configs load
unchanged; snake_case names are accepted as well.
"""

from typing import FrozenSet, List, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from activityfilter.core.conditions import ConditionName

LinkedConditionItem = Union[ConditionName, List[ConditionName]]
LinkedGroups = Tuple[FrozenSet[ConditionName], ...]

MODEL_CONFIG = ConfigDict(
    extra="forbid",
    populate_by_name=True,
    frozen=True,
)


def normalize_linked_conditions(linked_conditions: Sequence[LinkedConditionItem]) -> LinkedGroups:
    """
    Normalize the linked-conditions list into a sequence of groups.

    A flat list of names forms one group. Otherwise every nested list is a
    group and every bare name becomes a group of its own. When no group names
    any condition the result is empty. Otherwise empty groups are kept: they
    hold in normal mode and fail when reversed.

    Args:
        linked_conditions: Raw linked-conditions value

    Returns:
        Tuple of frozensets of condition names, in configuration order
    """
    items = list(linked_conditions)
    if not items:
        return ()

    if all(not isinstance(item, (list, tuple, set, frozenset)) for item in items):
        groups = [items]
    else:
        groups = [list(item) if isinstance(item, (list, tuple, set, frozenset)) else [item]
                  for item in items]

    if not any(groups):
        return ()

    return tuple(
        frozenset(ConditionName(name) for name in group)
        for group in groups
    )


class RemoveConfig(BaseModel):
    """Which entries to remove."""

    model_config = MODEL_CONFIG

    uncommented: bool = Field(
        default=False,
        strict=True,
        description="Remove activities that have no comments"
    )
    unliked: bool = Field(
        default=False,
        strict=True,
        description="Remove activities that have no likes"
    )
    text: bool = Field(
        default=False,
        strict=True,
        description="Remove activities containing only text"
    )
    images: bool = Field(
        default=False,
        strict=True,
        description="Remove activities containing images"
    )
    videos: bool = Field(
        default=False,
        strict=True,
        description="Remove activities containing videos"
    )
    contains_strings: List[Union[str, List[str]]] = Field(
        default_factory=list,
        alias="containsStrings",
        description="Remove activities containing user-defined strings; nested lists must all match"
    )

    @field_validator('contains_strings')
    @classmethod
    def validate_term_groups(cls, v):
        """Reject empty AND-groups, which would match every entry."""
        for i, group in enumerate(v):
            if isinstance(group, list) and not group:
                raise ValueError(f"containsStrings[{i}] must not be an empty group")
        return v

    def is_enabled(self, name: ConditionName) -> bool:
        """Whether a condition is enabled for independent evaluation."""
        if name is ConditionName.CONTAINS_STRINGS:
            return any(
                isinstance(group, str) or len(group) > 0
                for group in self.contains_strings
            )
        return getattr(self, name.value) is True


class OptionsConfig(BaseModel):
    """How conditions are evaluated."""

    model_config = MODEL_CONFIG

    target_load_count: int = Field(
        default=2,
        ge=1,
        strict=True,
        alias="targetLoadCount",
        description="Minimum number of activities to show per click on the load-more button"
    )
    case_sensitive: bool = Field(
        default=False,
        strict=True,
        alias="caseSensitive",
        description="Whether string-based removal should be case-sensitive"
    )
    reverse_conditions: bool = Field(
        default=False,
        strict=True,
        alias="reverseConditions",
        description="Only keep activities that would be removed by the conditions"
    )
    linked_conditions: List[LinkedConditionItem] = Field(
        default_factory=list,
        alias="linkedConditions",
        description="Groups of conditions to be checked together"
    )

    @property
    def linked_groups(self) -> LinkedGroups:
        """Linked conditions normalized into groups."""
        return normalize_linked_conditions(self.linked_conditions)

    @property
    def linked_flat(self) -> FrozenSet[ConditionName]:
        """Union of all names in all linked groups."""
        return frozenset().union(*self.linked_groups) if self.linked_groups else frozenset()


class RunOnConfig(BaseModel):
    """Which feeds the filter runs on."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    home: bool = Field(default=True, strict=True, description="Run on the home feed")
    social: bool = Field(default=True, strict=True, description="Run on social feeds")
    profile: bool = Field(default=False, strict=True, description="Run on user profile feeds")

    def enabled_contexts(self) -> List[str]:
        """Names of the feed contexts switched on."""
        values = self.model_dump()
        return [name for name, enabled in values.items() if enabled is True]


class AppConfig(BaseModel):
    """Root application configuration model."""

    model_config = MODEL_CONFIG

    remove: RemoveConfig = Field(default_factory=RemoveConfig, description="Removal criteria")
    options: OptionsConfig = Field(default_factory=OptionsConfig, description="Evaluation options")
    run_on: RunOnConfig = Field(
        default_factory=RunOnConfig,
        alias="runOn",
        description="Feed contexts the filter runs on"
    )
    verbose: bool = Field(default=False, description="Enable verbose logging output")

    def enabled_conditions(self) -> List[ConditionName]:
        """Conditions enabled through the remove section, in catalog order."""
        return [name for name in ConditionName if self.remove.is_enabled(name)]
