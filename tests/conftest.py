import pytest

from preference_grouping.presentation_layer.repository_impls.preference_repository_impl import PreferenceRepositoryImpl

OWNER_ID = "scenario-1"


def make_repository(choices_by_student: dict, owner_id: str = OWNER_ID) -> PreferenceRepositoryImpl:
    """{"a": ["G1", "G2"], ...} から好みのリポジトリを作る"""
    return PreferenceRepositoryImpl.of(
        owner_id,
        [{"studentId": sid, "likeGroupIds": choices} for sid, choices in choices_by_student.items()],
    )


def member_sets(outcome) -> dict:
    return {group.name: sorted(group.member_ids) for group in outcome.groups}


def assert_partition(outcome, participant_ids):
    """members ∪ unassigned == participants, and no one appears twice"""
    members = outcome.groups.member_ids()
    assert len(members) == len(set(members))
    assert set(members).isdisjoint(outcome.unassigned_ids)
    assert sorted(members + outcome.unassigned_ids) == sorted(participant_ids)


def assert_within_capacity(outcome):
    for group in outcome.groups:
        assert not group.is_over_capacity(), group.as_str()


@pytest.fixture
def empty_repository():
    return PreferenceRepositoryImpl.empty()


@pytest.fixture
def participants():
    return [f"s{i}" for i in range(1, 13)]
