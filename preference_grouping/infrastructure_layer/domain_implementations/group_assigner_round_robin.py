from typing import List

from .group_assigner_base import CapacityExhaustedError, PreferenceGroupAssigner, place_round_robin
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.value_objects.grouping_config import GroupingConfig
from ...domain_layer.value_objects.grouping_outcome import GroupingOutcome


class GroupAssignerRoundRobin(PreferenceGroupAssigner):
    """
    Distributes participants evenly by cycling through the groups.
    """

    def _assign(
        self,
        scenario_owner_id: str,
        participant_ids: List[str],
        config: GroupingConfig,
        preferences: Preferences,
    ) -> GroupingOutcome:
        groups = self._build_groups(len(participant_ids), config)
        order = self._processing_order(participant_ids, config)

        _, unplaced = place_round_robin(order, groups)
        if unplaced:
            raise CapacityExhaustedError(unplaced)
        return GroupingOutcome.succeeded(groups)
