from dataclasses import dataclass, field
from typing import Any, List, Optional

@dataclass(frozen=True)
class GetGroupsParams:
    """
    Parameters for getting groups.
    """
    scenario_owner_id: str
    participant_ids: List[str]
    algorithm_config: Optional[Any] = field(default=None)

    @staticmethod
    def of(scenario_owner_id: str, participant_ids: List[str], algorithm_config: Optional[Any] = None) -> 'GetGroupsParams':
        return GetGroupsParams(scenario_owner_id, list(participant_ids), algorithm_config)
