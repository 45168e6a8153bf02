from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from ..first_class_collections.groups import Groups
from ..first_class_collections.preferences import Preferences


class FailureReason(Enum):
    EMPTY_INPUT = "EMPTY_INPUT"
    CAPACITY_EXHAUSTED = "CAPACITY_EXHAUSTED"
    CONFIGURATION = "CONFIGURATION"
    GROUPING_ALGORITHM_FAILED = "GROUPING_ALGORITHM_FAILED"

    def as_str(self) -> str:
        return self.value


@dataclass(frozen=True)
class GroupingOutcome:
    """
    Result of one grouping call.

    A failed outcome may still carry the partially filled groups and the
    participants that could not be placed. ``preferences`` is the lookup the
    strategy read, so callers can score the groups without reading it again;
    it is None when the call stopped before any preference was read.
    """
    success: bool
    groups: Groups = field(default_factory=Groups.empty)
    unassigned_ids: List[str] = field(default_factory=list)
    message: Optional[str] = None
    reason: Optional[FailureReason] = None
    preferences: Optional[Preferences] = field(default=None, compare=False, repr=False)

    @staticmethod
    def succeeded(groups: Groups, unassigned_ids: Optional[List[str]] = None) -> 'GroupingOutcome':
        return GroupingOutcome(success=True, groups=groups, unassigned_ids=list(unassigned_ids or []))

    @staticmethod
    def failed(
        message: str,
        reason: FailureReason,
        groups: Optional[Groups] = None,
        unassigned_ids: Optional[List[str]] = None,
    ) -> 'GroupingOutcome':
        return GroupingOutcome(
            success=False,
            groups=groups if groups is not None else Groups.empty(),
            unassigned_ids=list(unassigned_ids or []),
            message=message,
            reason=reason,
        )

    def with_preferences(self, preferences: Preferences) -> 'GroupingOutcome':
        return replace(self, preferences=preferences)

    def assigned_ids(self) -> List[str]:
        return self.groups.member_ids()

    def convert_to_json(self) -> dict:
        data = {
            "success": self.success,
            "groups": self.groups.convert_to_json(),
            "unassignedIds": list(self.unassigned_ids),
        }
        if not self.success:
            data["message"] = self.message
            data["reason"] = self.reason.as_str() if self.reason else None
        return data
