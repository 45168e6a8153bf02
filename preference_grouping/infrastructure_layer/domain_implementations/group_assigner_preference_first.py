import logging
from typing import List

from .group_assigner_base import CapacityExhaustedError, PreferenceGroupAssigner, place_round_robin
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.value_objects.grouping_config import GroupingConfig
from ...domain_layer.value_objects.grouping_outcome import GroupingOutcome

logger = logging.getLogger(__name__)


class GroupAssignerPreferenceFirst(PreferenceGroupAssigner):
    """
    Places each participant in their highest ranked group with room left,
    then fills the rest round-robin.
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

        remaining: List[str] = []
        for participant_id in order:
            assigned = False
            for choice in preferences.choices_of(participant_id):
                group = groups.find_by_id_or_name(choice)
                if group is not None and group.has_remaining_capacity():
                    group.add_member(participant_id)
                    assigned = True
                    break
            if not assigned:
                remaining.append(participant_id)

        logger.debug(f"{len(order) - len(remaining)} placed by preference, {len(remaining)} left for round-robin")

        _, unplaced = place_round_robin(remaining, groups)
        if unplaced:
            raise CapacityExhaustedError(unplaced)
        return GroupingOutcome.succeeded(groups)
