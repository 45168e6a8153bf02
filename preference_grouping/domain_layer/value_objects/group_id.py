from dataclasses import dataclass
from ...infrastructure_layer.helper.ulid_helper import ULIDHelper

GROUP_ID_PREFIX = 'group'

@dataclass(frozen=True)
class GroupId:
    """
    Identifier of a group.

    Caller supplied ids are opaque and kept verbatim; generated ids are
    ULIDs carrying the ``group-`` prefix.
    """
    value: str

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return 'Group Id: ' + self.value

    def is_generated(self) -> bool:
        prefix = GROUP_ID_PREFIX + '-'
        return self.value.startswith(prefix) and ULIDHelper.validate(self.value[len(prefix):])

    @staticmethod
    def of(value: str) -> "GroupId":
        if not isinstance(value, str) or not value.strip():
            raise GroupIdValidationError(f"Invalid GroupId: {value!r}")
        return GroupId(value)

    @staticmethod
    def generate() -> "GroupId":
        return GroupId(GROUP_ID_PREFIX + '-' + ULIDHelper.generate())

class GroupIdValidationError(Exception):
    """
    Custom exception for GroupId validation errors.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"GroupIdValidationError: {self.message}"
