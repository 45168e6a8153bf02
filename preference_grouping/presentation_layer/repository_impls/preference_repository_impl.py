import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Union

from ...application_layer.repository_interfaces.preference_repository import PreferenceRepository
from ...domain_layer.entities.preference_record import PreferenceRecord


class PreferenceRepositoryImpl(PreferenceRepository):
    """
    In-memory preference store, optionally loaded from the input JSON.
    """

    def __init__(self, records: Iterable[PreferenceRecord] = ()):
        self._records: Dict[str, List[PreferenceRecord]] = defaultdict(list)
        for record in records:
            self._records[record.program_id].append(record)

    @staticmethod
    def empty() -> 'PreferenceRepositoryImpl':
        return PreferenceRepositoryImpl()

    @staticmethod
    def of(program_id: str, data: list) -> 'PreferenceRepositoryImpl':
        """
        Build from a list of entries, each either ``{"studentId", "payload"}``
        or a bare payload carrying its own ``studentId``.
        """
        if data is None:
            return PreferenceRepositoryImpl.empty()
        if not isinstance(data, list):
            raise ValueError("'preferences' must be a list")
        records = []
        for entry in data:
            if not isinstance(entry, dict):
                raise ValueError("Each preference must be a dictionary")
            student_id = entry.get("studentId")
            if not isinstance(student_id, str) or not student_id:
                raise ValueError("Each preference must have a 'studentId'")
            payload = entry["payload"] if "payload" in entry else entry
            records.append(PreferenceRecord.of(program_id, student_id, payload, id=entry.get("id")))
        return PreferenceRepositoryImpl(records)

    @staticmethod
    def read_json(path: Union[str, Path]) -> dict:
        with open(path, 'r', encoding='utf-8') as file:
            return json.load(file)

    async def list_by_program_id(self, program_id: str) -> List[PreferenceRecord]:
        return list(self._records.get(program_id, []))
