from dataclasses import dataclass
from typing import Dict, List, Optional

from ..entities.group import Group

@dataclass(frozen=True)
class Groups:
    """
    Class representing a collection of groups.

    The tuple of groups is fixed, the groups themselves are mutable so that a
    strategy can fill a working copy in place.
    """
    groups: List[Group]

    @staticmethod
    def of(groups: List[Group]) -> 'Groups':
        return Groups(list(groups))

    @staticmethod
    def empty() -> 'Groups':
        return Groups([])

    def __iter__(self):
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def get_group(self, group_id: str) -> Group:
        for group in self.groups:
            if group.id == group_id:
                return group
        raise GroupsNotFoundError(f"Group {group_id} not found.")

    def find_by_id_or_name(self, id_or_name: str) -> Optional[Group]:
        """id一致を優先し、次に大文字小文字を無視した名前一致で探す"""
        for group in self.groups:
            if group.id == id_or_name:
                return group
        lowered = id_or_name.lower()
        for group in self.groups:
            if group.name.lower() == lowered:
                return group
        return None

    def member_ids(self) -> List[str]:
        return [member_id for group in self.groups for member_id in group.member_ids]

    def membership(self) -> Dict[str, Group]:
        """participant id -> group"""
        return {member_id: group for group in self.groups for member_id in group.member_ids}

    def with_remaining_capacity(self) -> List[Group]:
        return [group for group in self.groups if group.has_remaining_capacity()]

    def empty_copy(self) -> 'Groups':
        return Groups.of([group.empty_copy() for group in self.groups])

    def deep_copy(self) -> 'Groups':
        return Groups.of([group.model_copy(deep=True) for group in self.groups])

    def convert_to_json(self) -> List[dict]:
        return [group.convert_to_json() for group in self.groups]

class GroupsNotFoundError(Exception):
    """
    Exception raised when a group is not found in the collection.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"GroupsNotFoundError: {self.message}"
