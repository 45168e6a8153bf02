from dataclasses import dataclass

@dataclass(frozen=True)
class ParticipantId:
    """
    Opaque identifier of a participant (usually a student id or e-mail).
    """
    value: str

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return 'Participant Id: ' + self.value

    @staticmethod
    def of(value: str) -> "ParticipantId":
        if not isinstance(value, str) or not value.strip():
            raise ParticipantIdValidationError(f"Invalid ParticipantId: {value!r}")
        return ParticipantId(value)

class ParticipantIdValidationError(Exception):
    """
    Custom exception for ParticipantId validation errors.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"ParticipantIdValidationError: {self.message}"
