from typing import List

import pytest

from conftest import OWNER_ID, assert_partition, make_repository, member_sets
from preference_grouping.application_layer.input_params.generate_candidates_params import GenerateCandidatesParams
from preference_grouping.application_layer.input_params.get_groups_params import GetGroupsParams
from preference_grouping.application_layer.usecases.generate_candidates_usecase import GenerateCandidatesUseCase
from preference_grouping.application_layer.usecases.get_groups_usecase import GetGroupsUseCase
from preference_grouping.container import create_injector
from preference_grouping.domain_layer.entities.preference_record import PreferenceRecord
from preference_grouping.domain_layer.value_objects.algorithm_id import AlgorithmId
from preference_grouping.domain_layer.value_objects.grouping_outcome import FailureReason
from preference_grouping.infrastructure_layer.helper.seeded_random import derive_seed
from preference_grouping.presentation_layer.factories.group_assignment_result_formatter_factory import GroupAssignmentResultFormatterFactory
from preference_grouping.presentation_layer.repository_impls.preference_repository_impl import PreferenceRepositoryImpl


class CountingRepository(PreferenceRepositoryImpl):
    """読み込み回数を数えるリポジトリ"""

    def __init__(self, records=()):
        super().__init__(records)
        self.reads = 0

    async def list_by_program_id(self, program_id: str) -> List[PreferenceRecord]:
        self.reads += 1
        return await super().list_by_program_id(program_id)


def candidates_usecase(repository) -> GenerateCandidatesUseCase:
    return create_injector(repository).get(GenerateCandidatesUseCase)


# -------------------------------
# Params
# -------------------------------

def test_count_defaults_to_five():
    assert GenerateCandidatesParams.of(OWNER_ID, ["a"]).count == 5


def test_count_is_at_least_one():
    assert GenerateCandidatesParams.of(OWNER_ID, ["a"], count=0).count == 1
    assert GenerateCandidatesParams.of(OWNER_ID, ["a"], count=-3).count == 1


# -------------------------------
# Seeds and algorithms
# -------------------------------

@pytest.mark.asyncio
async def test_seeds_step_by_9973_from_config_seed(empty_repository, participants):
    result = await candidates_usecase(empty_repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, {"seed": 100}, count=3)
    )
    assert result["success"] is True
    assert [c["algorithm_config"]["seed"] for c in result["candidates"]] == [100, 10073, 20046]


@pytest.mark.asyncio
async def test_seed_base_falls_back_to_scenario_id(empty_repository, participants):
    result = await candidates_usecase(empty_repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, count=2)
    )
    base = derive_seed(OWNER_ID)
    assert [c["algorithm_config"]["seed"] for c in result["candidates"]] == [base, base + 9973]


def test_boolean_seed_is_not_a_seed_base():
    assert GenerateCandidatesUseCase.seed_base_for(OWNER_ID, {"seed": True}) == derive_seed(OWNER_ID)


@pytest.mark.asyncio
async def test_algorithms_rotate(empty_repository, participants):
    result = await candidates_usecase(empty_repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, {"seed": 1})
    )
    ids = [c["algorithm_id"].as_str() for c in result["candidates"]]
    assert ids == ["balanced", "random", "round-robin", "preference-first", "balanced"]
    assert [c["algorithm_config"]["algorithm"] for c in result["candidates"]] == ids
    for candidate in result["candidates"]:
        assert_partition(candidate["outcome"], participants)


@pytest.mark.asyncio
async def test_requested_algorithm_is_overridden(empty_repository, participants):
    result = await candidates_usecase(empty_repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, {"seed": 1, "algorithm": "genetic"}, count=2)
    )
    assert [c["algorithm_id"].as_str() for c in result["candidates"]] == ["balanced", "random"]


@pytest.mark.asyncio
async def test_caller_config_is_not_mutated(empty_repository, participants):
    config = {"seed": 7, "groups": [{"name": "A", "capacity": 6}, {"name": "B", "capacity": 6}]}
    result = await candidates_usecase(empty_repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, config, count=2)
    )
    assert config == {"seed": 7, "groups": [{"name": "A", "capacity": 6}, {"name": "B", "capacity": 6}]}
    assert result["candidates"][0]["algorithm_config"]["groups"] is not config["groups"]


# -------------------------------
# Results
# -------------------------------

@pytest.mark.asyncio
async def test_candidates_are_reproducible(participants):
    choices = {"s1": ["Group 1"], "s2": ["Group 2"], "s3": ["Group 1", "Group 2"]}
    params = GenerateCandidatesParams.of(OWNER_ID, participants, {"seed": 42}, count=4)
    first = await candidates_usecase(make_repository(choices)).execute(params)
    second = await candidates_usecase(make_repository(choices)).execute(params)

    assert [member_sets(c["outcome"]) for c in first["candidates"]] == [
        member_sets(c["outcome"]) for c in second["candidates"]
    ]
    assert [c["evaluation_score"] for c in first["candidates"]] == [c["evaluation_score"] for c in second["candidates"]]
    # 候補IDは毎回新しく振られる
    assert first["candidates"][0]["id"] != second["candidates"][0]["id"]


@pytest.mark.asyncio
async def test_candidate_matches_single_run_with_same_config(empty_repository, participants):
    result = await candidates_usecase(empty_repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, {"seed": 9}, count=2)
    )
    single = await create_injector(empty_repository).get(GetGroupsUseCase).execute(
        GetGroupsParams.of(OWNER_ID, participants, {"seed": 9 + 9973, "algorithm": "random"})
    )
    assert member_sets(result["candidates"][1]["outcome"]) == member_sets(single["outcome"])


@pytest.mark.asyncio
async def test_first_failure_stops_generation(participants):
    repository = CountingRepository()
    config = {"seed": 3, "groups": [{"name": "Tiny", "capacity": 2}]}
    result = await candidates_usecase(repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, config, count=5)
    )

    assert result["success"] is False
    assert result["candidates"] == []
    assert result["reason"] is FailureReason.GROUPING_ALGORITHM_FAILED
    assert result["algorithm_id"].as_str() == "balanced"
    assert "10 student(s)" in result["message"]
    # 1件目で止まるので希望も1回しか読まない
    assert repository.reads == 1


@pytest.mark.asyncio
async def test_formatted_candidates(empty_repository, participants):
    result = await candidates_usecase(empty_repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, {"seed": 2}, count=2)
    )
    formatted = GroupAssignmentResultFormatterFactory.create().format_candidates(result)

    assert formatted["success"] is True
    first = formatted["candidates"][0]
    assert first["algorithmId"] == "balanced"
    assert first["algorithmLabel"] == "Balanced"
    assert first["algorithmConfig"] == {"seed": 2, "algorithm": "balanced"}
    assert "score" in first["evaluation"]


def test_formatted_failure():
    result = GenerateCandidatesUseCase._failed("no room", AlgorithmId.RANDOM)
    formatted = GroupAssignmentResultFormatterFactory.create().format_candidates(result)
    assert formatted == {
        "success": False,
        "candidates": [],
        "message": "no room",
        "reason": "GROUPING_ALGORITHM_FAILED",
        "algorithmId": "random",
    }


# -------------------------------
# Preferences are read once per run
# -------------------------------

@pytest.mark.asyncio
async def test_single_run_reads_preferences_once(participants):
    repository = CountingRepository([PreferenceRecord.of(OWNER_ID, "s1", {"likeGroupIds": ["Group 1"]})])
    result = await create_injector(repository).get(GetGroupsUseCase).execute(
        GetGroupsParams.of(OWNER_ID, participants, {"seed": 4})
    )

    assert repository.reads == 1
    assert result["outcome"].preferences is not None
    # 評価にも同じ希望が使われる
    assert result["metrics"].ranked_count == 1


@pytest.mark.asyncio
async def test_each_candidate_reads_preferences_once(participants):
    repository = CountingRepository()
    await candidates_usecase(repository).execute(
        GenerateCandidatesParams.of(OWNER_ID, participants, {"seed": 4}, count=3)
    )
    assert repository.reads == 3
