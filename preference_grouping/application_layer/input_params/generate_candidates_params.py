from dataclasses import dataclass, field
from typing import Any, List, Optional

DEFAULT_CANDIDATE_COUNT = 5

@dataclass(frozen=True)
class GenerateCandidatesParams:
    """
    Parameters for generating several candidate groupings of one scenario.
    """
    scenario_owner_id: str
    participant_ids: List[str]
    algorithm_config: Optional[Any] = field(default=None)
    count: int = DEFAULT_CANDIDATE_COUNT

    @staticmethod
    def of(
        scenario_owner_id: str,
        participant_ids: List[str],
        algorithm_config: Optional[Any] = None,
        count: Optional[int] = None,
    ) -> 'GenerateCandidatesParams':
        return GenerateCandidatesParams(
            scenario_owner_id,
            list(participant_ids),
            algorithm_config,
            max(1, count) if count is not None else DEFAULT_CANDIDATE_COUNT,
        )
