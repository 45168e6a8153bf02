from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..entities.student_preference import StudentPreference

@dataclass(frozen=True)
class Preferences:
    """
    Class representing the preference lookup of one grouping call.
    """
    by_student_id: Dict[str, StudentPreference] = field(default_factory=dict)

    @staticmethod
    def of(preferences: Iterable[StudentPreference]) -> 'Preferences':
        return Preferences({p.student_id: p for p in preferences})

    @staticmethod
    def empty() -> 'Preferences':
        return Preferences({})

    def __contains__(self, student_id: str) -> bool:
        return student_id in self.by_student_id

    def get(self, student_id: str) -> StudentPreference:
        preference = self.by_student_id.get(student_id)
        if preference is None:
            return StudentPreference.empty(student_id)
        return preference

    def choices_of(self, student_id: str) -> List[str]:
        return self.get(student_id).like_group_ids
