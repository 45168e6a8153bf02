from abc import ABC, abstractmethod
from typing import List

from ...domain_layer.entities.preference_record import PreferenceRecord

class PreferenceRepository(ABC):
    @abstractmethod
    async def list_by_program_id(self, program_id: str) -> List[PreferenceRecord]:
        raise NotImplementedError("This method should be overridden by subclasses.")
