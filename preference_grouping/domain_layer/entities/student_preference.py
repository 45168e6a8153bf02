from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

class StudentPreference(BaseModel):
    """
    Ranked preferences of one participant.

    ``like_group_ids`` is ordered by rank (index 0 is the top choice) and may
    hold group ids or group names. The student lists are only kept so the
    payload survives parsing; the group strategies ignore them.
    """

    student_id: str
    like_group_ids: List[str] = Field(default_factory=list)
    like_student_ids: List[str] = Field(default_factory=list)
    avoid_student_ids: List[str] = Field(default_factory=list)
    avoid_group_ids: List[str] = Field(default_factory=list)
    meta: Optional[Dict[str, Any]] = None

    @staticmethod
    def empty(student_id: str) -> 'StudentPreference':
        return StudentPreference(student_id=student_id)

    def top_choice(self) -> Optional[str]:
        if not self.like_group_ids:
            return None
        return self.like_group_ids[0]
