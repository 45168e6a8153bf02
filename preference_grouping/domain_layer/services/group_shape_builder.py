import logging
import math
from typing import List

from ..entities.group import Group
from ..first_class_collections.groups import Groups
from ..value_objects.grouping_config import GroupingConfig

logger = logging.getLogger(__name__)

DEFAULT_MIN_GROUP_SIZE = 4
DEFAULT_MAX_GROUP_SIZE = 6
IDEAL_GROUP_SIZE = 5


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class GroupShapeBuilder:
    """
    Builds the empty groups a strategy fills.
    """

    @staticmethod
    def build(participant_count: int, config: GroupingConfig) -> Groups:
        if config.has_explicit_groups():
            return GroupShapeBuilder.from_shells(config)
        return GroupShapeBuilder.generate_default_groups(participant_count, config)

    @staticmethod
    def from_shells(config: GroupingConfig) -> Groups:
        groups: List[Group] = []
        for shell in config.groups or []:
            if shell.id:
                groups.append(Group.of(shell.id, shell.name, shell.capacity))
            else:
                groups.append(Group.create(shell.name, shell.capacity))
        return Groups.of(groups)

    @staticmethod
    def generate_default_groups(participant_count: int, config: GroupingConfig) -> Groups:
        min_size = config.min_group_size if config.min_group_size is not None else DEFAULT_MIN_GROUP_SIZE
        max_size = config.max_group_size if config.max_group_size is not None else DEFAULT_MAX_GROUP_SIZE
        if min_size < 1:
            min_size = 1
        if max_size < min_size:
            max_size = min_size

        ideal_size = min(max(IDEAL_GROUP_SIZE, min_size), max_size)

        if config.target_group_count is not None and config.target_group_count > 0:
            group_count = config.target_group_count
        else:
            group_count = _round_half_up(participant_count / ideal_size)
        # 人数より多いグループは作らない
        group_count = min(group_count, participant_count)
        if group_count <= 0:
            group_count = 1

        # 平均サイズが min/max に収まるようにグループ数を調整
        while participant_count / group_count < min_size and group_count > 1:
            group_count -= 1
        while participant_count / group_count > max_size:
            group_count += 1

        # 左から順に ceil(残り人数 / 残りグループ数) を割り当てる（差は高々1）
        groups: List[Group] = []
        remaining = participant_count
        for i in range(1, group_count + 1):
            remaining_groups = group_count - i + 1
            capacity = math.ceil(remaining / remaining_groups)
            capacity = max(min(capacity, max_size), min_size)
            groups.append(Group.create(f"Group {i}", capacity))
            remaining -= capacity

        logger.debug(
            f"Generated {group_count} groups for {participant_count} participants "
            f"(min={min_size}, max={max_size}): {[g.capacity for g in groups]}"
        )
        return Groups.of(groups)
