from typing import Any, Optional

from pydantic import BaseModel

class PreferenceRecord(BaseModel):
    """
    Preference as stored by a repository. ``payload`` is opaque here and is
    only interpreted by the PreferenceFactory.
    """

    id: Optional[str] = None
    program_id: str
    student_id: str
    payload: Any = None

    @staticmethod
    def of(program_id: str, student_id: str, payload: Any, id: Optional[str] = None) -> 'PreferenceRecord':
        return PreferenceRecord(id=id, program_id=program_id, student_id=student_id, payload=payload)

    def get_student_id(self) -> str:
        return self.student_id

    def get_payload(self) -> Any:
        return self.payload
