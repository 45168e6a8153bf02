import math
from typing import List

from .group_assigner_base import CapacityExhaustedError, PreferenceGroupAssigner
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.value_objects.grouping_config import GroupingConfig
from ...domain_layer.value_objects.grouping_outcome import GroupingOutcome


class GroupAssignerRandom(PreferenceGroupAssigner):
    """
    Assigns each participant to a random group that still has room.
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
        rng = self._random_source(config.seed)

        for position, participant_id in enumerate(order):
            available = groups.with_remaining_capacity()
            if not available:
                raise CapacityExhaustedError(order[position:])
            available[math.floor(rng.random() * len(available))].add_member(participant_id)

        return GroupingOutcome.succeeded(groups)
