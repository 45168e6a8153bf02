import logging
from typing import List, Optional

from .group_assigner_base import PreferenceGroupAssigner
from ..helper.seeded_random import fisher_yates
from ...domain_layer.entities.group import Group
from ...domain_layer.first_class_collections.groups import Groups
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.value_objects.grouping_config import GroupingConfig
from ...domain_layer.value_objects.grouping_outcome import FailureReason, GroupingOutcome

logger = logging.getLogger(__name__)


class GroupAssignerBalanced(PreferenceGroupAssigner):
    """
    Default strategy: ranked choices first, then even fill.

    Phase 1 walks each participant's choices in rank order and takes the first
    group with room. Phase 2 reshuffles whoever fell through and puts each of
    them in the group with the most remaining capacity.
    """

    def _assign(
        self,
        scenario_owner_id: str,
        participant_ids: List[str],
        config: GroupingConfig,
        preferences: Preferences,
    ) -> GroupingOutcome:
        groups = self._build_groups(len(participant_ids), config)
        rng = self._random_source(config.seed)
        order = fisher_yates(participant_ids, rng)

        # フェーズ1: 希望順に空きのあるグループへ
        fallen_through: List[str] = []
        for participant_id in order:
            placed = False
            for choice in preferences.choices_of(participant_id):
                group = groups.find_by_id_or_name(choice)
                if group is not None and group.has_remaining_capacity():
                    group.add_member(participant_id)
                    placed = True
                    break
            if not placed:
                fallen_through.append(participant_id)

        # フェーズ2: 残りを空きが最も多いグループへ
        unassigned: List[str] = []
        for participant_id in fisher_yates(fallen_through, rng):
            group = self._most_remaining_capacity(groups)
            if group is None:
                unassigned.append(participant_id)
                continue
            group.add_member(participant_id)

        logger.debug(
            f"Balanced: {len(order) - len(fallen_through)} by preference, "
            f"{len(fallen_through) - len(unassigned)} by fill, {len(unassigned)} unassigned"
        )

        if unassigned:
            return GroupingOutcome.failed(
                f"Failed to assign {len(unassigned)} student(s): {', '.join(unassigned)}. All groups may be at capacity.",
                FailureReason.CAPACITY_EXHAUSTED,
                groups=groups,
                unassigned_ids=unassigned,
            )
        return GroupingOutcome.succeeded(groups)

    @staticmethod
    def _most_remaining_capacity(groups: Groups) -> Optional[Group]:
        best: Optional[Group] = None
        for group in groups:
            if not group.has_remaining_capacity():
                continue
            if best is None or group.remaining_capacity() > best.remaining_capacity():
                best = group
        return best
