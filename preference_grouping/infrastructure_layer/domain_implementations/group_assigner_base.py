import logging
from abc import abstractmethod
from typing import Any, List, Optional, Sequence, Tuple

from ..helper.seeded_random import RandomSourceFactory, build_random_source, fisher_yates
from ...application_layer.factories.preference_factory import PreferenceFactory
from ...application_layer.repository_interfaces.preference_repository import PreferenceRepository
from ...domain_layer.first_class_collections.groups import Groups
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.services.group_assigner import GroupAssigner
from ...domain_layer.services.group_shape_builder import GroupShapeBuilder
from ...domain_layer.value_objects.grouping_config import GroupingConfig, GroupingConfigError
from ...domain_layer.value_objects.grouping_outcome import FailureReason, GroupingOutcome

logger = logging.getLogger(__name__)

NO_PARTICIPANTS_MESSAGE = "No students provided for grouping"


class CapacityExhaustedError(Exception):
    """
    Exception raised when the groups cannot hold every participant.
    """
    def __init__(self, unplaced_ids: Sequence[str]):
        self.unplaced_ids = list(unplaced_ids)
        self.message = (
            f"All groups are at capacity. Failed to assign {len(self.unplaced_ids)} student(s): "
            f"{', '.join(self.unplaced_ids)}"
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


def place_round_robin(order: Sequence[str], groups: Groups, start_index: int = 0) -> Tuple[int, List[str]]:
    """
    Place participants cycling through the groups and skipping full ones.

    Stops at the first participant no group can take. Returns the next cycle
    index and the participants left unplaced (that one and everyone after).
    """
    index = start_index
    group_list = groups.groups
    if not group_list:
        return index, list(order)
    for position, participant_id in enumerate(order):
        placed = False
        for _ in range(len(group_list)):
            group = group_list[index % len(group_list)]
            index += 1
            if group.has_remaining_capacity():
                group.add_member(participant_id)
                placed = True
                break
        if not placed:
            return index, list(order[position:])
    return index, []

class PreferenceGroupAssigner(GroupAssigner):
    """
    Template shared by the concrete strategies.

    Validates the input, parses the configuration, reads the preferences once
    and turns capacity and configuration errors into failed outcomes.
    Subclasses implement _assign.
    """

    def __init__(
        self,
        preference_repository: Optional[PreferenceRepository] = None,
        random_source: RandomSourceFactory = build_random_source,
    ):
        self._preference_repository = preference_repository
        self._random_source = random_source

    async def assign_groups(
        self,
        scenario_owner_id: str,
        participant_ids: Sequence[str],
        algorithm_config: Any = None,
    ) -> GroupingOutcome:
        # 呼び出し元のスナップショットを変更しないようコピーする
        participant_ids = list(participant_ids or [])
        if not participant_ids:
            return GroupingOutcome.failed(NO_PARTICIPANTS_MESSAGE, FailureReason.EMPTY_INPUT)

        preferences: Optional[Preferences] = None
        try:
            config = GroupingConfig.parse(algorithm_config)
            # 非同期I/Oはここだけ。以降は同期的に計算する
            preferences = await self._load_preferences(scenario_owner_id, participant_ids)
            logger.info(f"{self.__class__.__name__}: assigning {len(participant_ids)} participants for {scenario_owner_id}")
            outcome = self._assign(scenario_owner_id, participant_ids, config, preferences)
        except CapacityExhaustedError as e:
            logger.info(f"{self.__class__.__name__}: {e}")
            outcome = GroupingOutcome.failed(e.message, FailureReason.CAPACITY_EXHAUSTED, unassigned_ids=e.unplaced_ids)
        except GroupingConfigError as e:
            logger.warning(f"{self.__class__.__name__}: {e}")
            outcome = GroupingOutcome.failed(e.message, FailureReason.CONFIGURATION)

        if preferences is None:
            return outcome
        return outcome.with_preferences(preferences)

    @abstractmethod
    def _assign(
        self,
        scenario_owner_id: str,
        participant_ids: List[str],
        config: GroupingConfig,
        preferences: Preferences,
    ) -> GroupingOutcome:
        pass

    async def _load_preferences(self, scenario_owner_id: str, participant_ids: Sequence[str]) -> Preferences:
        if self._preference_repository is None:
            return Preferences.empty()
        records = await self._preference_repository.list_by_program_id(scenario_owner_id)
        return PreferenceFactory.build_preferences(records, participant_ids)

    def _build_groups(self, participant_count: int, config: GroupingConfig) -> Groups:
        return GroupShapeBuilder.build(participant_count, config)

    def _processing_order(self, participant_ids: Sequence[str], config: GroupingConfig) -> List[str]:
        """Seeded shuffle when a seed is configured, input order otherwise."""
        if config.has_seed():
            return fisher_yates(participant_ids, self._random_source(config.seed))
        return list(participant_ids)
