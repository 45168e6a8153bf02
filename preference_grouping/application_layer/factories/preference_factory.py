import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from ...domain_layer.entities.preference_record import PreferenceRecord
from ...domain_layer.entities.student_preference import StudentPreference
from ...domain_layer.first_class_collections.preferences import Preferences

logger = logging.getLogger(__name__)

_LIST_FIELDS = (
    ("likeGroupIds", "like_group_ids"),
    ("likeStudentIds", "like_student_ids"),
    ("avoidStudentIds", "avoid_student_ids"),
    ("avoidGroupIds", "avoid_group_ids"),
)

class PreferenceFactory:
    @staticmethod
    def create_preference(payload: Any, student_id: str) -> StudentPreference:
        """
        Create a StudentPreference from a stored payload.

        Each field is coerced on its own: a field that is missing or of the
        wrong shape becomes an empty list, non-string entries are dropped.
        A payload that cannot be read at all yields an empty preference.
        """
        if payload is None:
            return StudentPreference.empty(student_id)
        if not isinstance(payload, Mapping):
            logger.warning(f"Failed to parse preferences for student {student_id}: payload is {type(payload).__name__}")
            return StudentPreference.empty(student_id)
        try:
            values = {}
            for camel, snake in _LIST_FIELDS:
                raw = payload.get(camel, payload.get(snake))
                values[snake] = PreferenceFactory._coerce_id_list(raw, camel, student_id)
            meta = payload.get("meta")
            payload_student_id = payload.get("studentId", payload.get("student_id"))
            return StudentPreference(
                student_id=payload_student_id if isinstance(payload_student_id, str) and payload_student_id else student_id,
                meta=dict(meta) if isinstance(meta, Mapping) else None,
                **values,
            )
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Failed to parse preferences for student {student_id}: {e}")
            return StudentPreference.empty(student_id)

    @staticmethod
    def _coerce_id_list(raw: Any, field_name: str, student_id: str) -> List[str]:
        if raw is None:
            return []
        if not isinstance(raw, (list, tuple)):
            logger.warning(f"Ignoring {field_name} of student {student_id}: expected a list, got {type(raw).__name__}")
            return []
        ids = [item for item in raw if isinstance(item, str)]
        if len(ids) != len(raw):
            logger.warning(f"Dropped {len(raw) - len(ids)} non-string entries from {field_name} of student {student_id}")
        return ids

    @staticmethod
    def build_preferences(records: Iterable[PreferenceRecord], participant_ids: Optional[Sequence[str]] = None) -> Preferences:
        """Preference lookup restricted to ``participant_ids`` (every record when None)."""
        wanted = set(participant_ids) if participant_ids is not None else None
        preferences = {}
        for record in records:
            student_id = record.get_student_id()
            if wanted is not None and student_id not in wanted:
                continue
            preference = PreferenceFactory.create_preference(record.get_payload(), student_id)
            # 参照キーは保存レコードのstudent_idに合わせる
            preferences[student_id] = preference.model_copy(update={"student_id": student_id})
        if wanted is not None:
            for student_id in participant_ids:
                if student_id not in preferences:
                    preferences[student_id] = StudentPreference.empty(student_id)
        return Preferences(preferences)
