import re

from ulid import ULID

ULID_PATTERN = re.compile(r'^[0-9a-hjkmnp-zA-HJKMNP-Z]{26}$')


class ULIDHelper:
    @staticmethod
    def generate() -> str:
        return str(ULID())

    @staticmethod
    def validate(value: str) -> bool:
        return bool(ULID_PATTERN.match(value))
