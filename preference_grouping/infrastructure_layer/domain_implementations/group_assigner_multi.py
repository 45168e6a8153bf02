import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Sequence

from ...domain_layer.services.group_assigner import GroupAssigner
from ...domain_layer.value_objects.algorithm_id import AlgorithmId
from ...domain_layer.value_objects.grouping_outcome import FailureReason, GroupingOutcome

logger = logging.getLogger(__name__)


class GroupAssignerMulti(GroupAssigner):
    """
    Dispatches to one of several strategies based on ``algorithm`` in the config.

    An absent or unknown id falls back to the default strategy. The call
    fails only when the default is not registered either.
    """

    def __init__(self, assigners: Dict[AlgorithmId, GroupAssigner], default_id: AlgorithmId = AlgorithmId.BALANCED):
        self._assigners = MappingProxyType(dict(assigners))
        self._default_id = default_id

    def get_default_id(self) -> AlgorithmId:
        return self._default_id

    def available_ids(self) -> List[AlgorithmId]:
        return list(self._assigners.keys())

    def resolve(self, requested: Optional[str]) -> Optional[GroupAssigner]:
        algorithm_id = AlgorithmId.find(requested)
        if algorithm_id is not None and algorithm_id in self._assigners:
            return self._assigners[algorithm_id]
        if requested is not None:
            logger.warning(f"Unknown grouping algorithm {requested!r}, falling back to {self._default_id.as_str()}")
        return self._assigners.get(self._default_id)

    async def assign_groups(
        self,
        scenario_owner_id: str,
        participant_ids: Sequence[str],
        algorithm_config: Any = None,
    ) -> GroupingOutcome:
        requested = self._requested_id(algorithm_config)
        assigner = self.resolve(requested)
        if assigner is None:
            unresolved = requested if requested is not None else self._default_id.as_str()
            return GroupingOutcome.failed(f"Unknown grouping algorithm: {unresolved}", FailureReason.CONFIGURATION)

        logger.debug(f"Dispatching to {assigner.__class__.__name__}")
        return await assigner.assign_groups(scenario_owner_id, participant_ids, algorithm_config)

    @staticmethod
    def _requested_id(algorithm_config: Any) -> Optional[str]:
        if isinstance(algorithm_config, Mapping):
            value = algorithm_config.get("algorithm")
        else:
            value = getattr(algorithm_config, "algorithm", None)
        return value if isinstance(value, str) else None
