import math
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..value_objects.group_id import GroupId

class Group(BaseModel):
    """
    Class representing a group and the participants placed in it.

    ``capacity`` of ``None`` means the group is unlimited.
    """

    id: str
    name: str
    capacity: Optional[int] = None
    member_ids: List[str] = Field(default_factory=list)

    @field_validator("capacity")
    @classmethod
    def _check_capacity(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError(f"capacity must be at least 1, got {value}")
        return value

    @staticmethod
    def of(id: str, name: str, capacity: Optional[int] = None, member_ids: Optional[List[str]] = None) -> 'Group':
        return Group(id=GroupId.of(id).as_str(), name=name, capacity=capacity, member_ids=list(member_ids or []))

    @staticmethod
    def create(name: str, capacity: Optional[int] = None) -> 'Group':
        return Group(id=GroupId.generate().as_str(), name=name, capacity=capacity)

    def size(self) -> int:
        return len(self.member_ids)

    def remaining_capacity(self) -> float:
        if self.capacity is None:
            return math.inf
        return self.capacity - len(self.member_ids)

    def has_remaining_capacity(self) -> bool:
        return self.remaining_capacity() > 0

    def is_over_capacity(self) -> bool:
        return self.remaining_capacity() < 0

    def add_member(self, participant_id: str) -> None:
        self.member_ids.append(participant_id)

    def matches(self, id_or_name: str) -> bool:
        return self.id == id_or_name or self.name.lower() == id_or_name.lower()

    def empty_copy(self) -> 'Group':
        return self.model_copy(update={"member_ids": []})

    def as_str(self) -> str:
        return f"Group {self.id} ({self.name}): {self.member_ids}"

    def convert_to_json(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "capacity": self.capacity,
            "memberIds": list(self.member_ids),
        }
