import logging
from typing import List

from .group_assigner_base import PreferenceGroupAssigner
from ..helper.seeded_random import fisher_yates
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.value_objects.grouping_config import GroupingConfig, GroupingConfigError
from ...domain_layer.value_objects.grouping_outcome import GroupingOutcome

logger = logging.getLogger(__name__)


class GroupAssignerFirstChoiceOnly(PreferenceGroupAssigner):
    """
    Puts every participant in their first choice and ignores capacity.

    Shows the raw demand for each group, so over-enrolled groups are
    expected. Participants without a resolvable first choice stay
    unassigned and the call still succeeds.
    """

    def _assign(
        self,
        scenario_owner_id: str,
        participant_ids: List[str],
        config: GroupingConfig,
        preferences: Preferences,
    ) -> GroupingOutcome:
        if not config.has_explicit_groups():
            raise GroupingConfigError("First Choice Only algorithm requires predefined groups")

        groups = self._build_groups(len(participant_ids), config)
        order = fisher_yates(participant_ids, self._random_source(config.seed))

        unassigned: List[str] = []
        for participant_id in order:
            first_choice = preferences.get(participant_id).top_choice()
            group = groups.find_by_id_or_name(first_choice) if first_choice else None
            if group is None:
                unassigned.append(participant_id)
                continue
            # 定員は確認しない
            group.add_member(participant_id)

        over = [g.name for g in groups if g.is_over_capacity()]
        if over:
            logger.info(f"First choice demand exceeds capacity in: {', '.join(over)}")
        return GroupingOutcome.succeeded(groups, unassigned)
