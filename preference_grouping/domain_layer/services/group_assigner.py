from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..value_objects.grouping_outcome import GroupingOutcome

class GroupAssigner(ABC):
    @abstractmethod
    async def assign_groups(
        self,
        scenario_owner_id: str,
        participant_ids: Sequence[str],
        algorithm_config: Any = None,
    ) -> GroupingOutcome:
        """
        Assign the participants to groups.

        ``scenario_owner_id`` identifies whose preferences to load,
        ``algorithm_config`` is the raw per-call configuration (a mapping
        or a GroupingConfig). Capacity and configuration problems come back
        as a failed GroupingOutcome rather than an exception.
        """
        pass
