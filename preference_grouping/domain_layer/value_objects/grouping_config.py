from collections.abc import Mapping
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class GroupShell(BaseModel):
    """
    A group shape supplied by the caller before any member is assigned.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str
    capacity: Optional[int] = None

    @field_validator("capacity")
    @classmethod
    def _check_capacity(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError(f"capacity must be at least 1, got {value}")
        return value


class GroupingConfig(BaseModel):
    """
    Per-call configuration shared by every strategy.

    Keys are accepted in camelCase (the wire format) or snake_case. Each
    strategy reads only the fields it understands.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    groups: Optional[List[GroupShell]] = None
    target_group_count: Optional[int] = Field(default=None, alias="targetGroupCount")
    min_group_size: Optional[int] = Field(default=None, alias="minGroupSize")
    max_group_size: Optional[int] = Field(default=None, alias="maxGroupSize")
    seed: Optional[int] = None
    algorithm: Optional[str] = None

    @staticmethod
    def empty() -> 'GroupingConfig':
        return GroupingConfig()

    @staticmethod
    def parse(raw: Any) -> 'GroupingConfig':
        if isinstance(raw, GroupingConfig):
            return raw
        if not isinstance(raw, Mapping):
            return GroupingConfig.empty()
        try:
            return GroupingConfig.model_validate(dict(raw))
        except ValidationError as e:
            raise GroupingConfigError(f"Invalid grouping config: {e}") from e

    def has_explicit_groups(self) -> bool:
        return bool(self.groups)

    def has_seed(self) -> bool:
        return self.seed is not None


class GroupingConfigError(Exception):
    """
    Exception raised when a grouping configuration cannot be used.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message
