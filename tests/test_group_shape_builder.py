import pytest

from preference_grouping.domain_layer.services.group_shape_builder import GroupShapeBuilder
from preference_grouping.domain_layer.value_objects.group_id import GroupId
from preference_grouping.domain_layer.value_objects.grouping_config import GroupingConfig, GroupingConfigError


def capacities(n, **config):
    return [g.capacity for g in GroupShapeBuilder.build(n, GroupingConfig.parse(config))]

# -------------------------------
# Auto-generated groups
# -------------------------------

def test_default_sizes_for_twenty():
    # 20 / 5 → 4 groups of 5
    assert capacities(20) == [5, 5, 5, 5]


def test_sizes_differ_by_at_most_one():
    sizes = capacities(23)
    assert max(sizes) - min(sizes) <= 1
    assert sum(sizes) == 23


def test_target_group_count():
    assert capacities(12, targetGroupCount=3) == [4, 4, 4]


def test_huge_target_count_is_capped_by_participants():
    # 10**9 groups would never finish shrinking; cap at 10 then shrink to 2
    assert capacities(10, targetGroupCount=10**9) == [5, 5]


def test_count_grows_when_average_exceeds_max():
    # targetGroupCount=1 would mean 12 per group; max 6 forces two groups
    assert capacities(12, targetGroupCount=1, maxGroupSize=6) == [6, 6]


def test_count_shrinks_when_average_below_min():
    assert capacities(8, targetGroupCount=4, minGroupSize=4, maxGroupSize=6) == [4, 4]


def test_max_raised_to_min():
    sizes = capacities(9, minGroupSize=3, maxGroupSize=1)
    assert all(size == 3 for size in sizes)


def test_min_clamped_to_one():
    assert capacities(2, minGroupSize=0, maxGroupSize=1) == [1, 1]


def test_small_count_floors_at_min():
    # 3 participants, 1 group, capacity floored at the min of 4
    assert capacities(3) == [4]


def test_generated_groups_have_ids_and_names():
    groups = GroupShapeBuilder.build(10, GroupingConfig.empty())
    assert [g.name for g in groups] == ["Group 1", "Group 2"]
    assert all(GroupId(g.id).is_generated() for g in groups)
    assert all(g.size() == 0 for g in groups)

# -------------------------------
# Explicit shells
# -------------------------------

def test_explicit_shells_are_kept_verbatim():
    config = GroupingConfig.parse({
        "groups": [
            {"id": "G1", "name": "Alpha", "capacity": 3},
            {"name": "Beta"},
        ],
        "targetGroupCount": 5,
    })
    groups = GroupShapeBuilder.build(40, config)
    assert len(groups) == 2
    alpha, beta = groups.groups
    assert (alpha.id, alpha.name, alpha.capacity) == ("G1", "Alpha", 3)
    assert beta.capacity is None
    assert GroupId(beta.id).is_generated()


def test_shell_capacity_must_be_positive():
    with pytest.raises(GroupingConfigError):
        GroupingConfig.parse({"groups": [{"name": "Bad", "capacity": 0}]})
