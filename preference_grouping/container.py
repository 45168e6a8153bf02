import logging
from typing import Optional

from injector import Injector, Module, provider, singleton

from .application_layer.factories.get_groups_usecase_factory import GetGroupsUseCaseFactory
from .application_layer.repository_interfaces.preference_repository import PreferenceRepository
from .application_layer.usecases.generate_candidates_usecase import GenerateCandidatesUseCase
from .application_layer.usecases.get_groups_usecase import GetGroupsUseCase
from .config.settings import settings
from .domain_layer.services.evaluation_algorithm import PreferenceSatisfactionEvaluationAlgorithm
from .domain_layer.services.group_assigner import GroupAssigner
from .domain_layer.value_objects.algorithm_id import AlgorithmId
from .infrastructure_layer.domain_implementations.group_assigner_annealing import GroupAssignerAnnealing
from .infrastructure_layer.domain_implementations.group_assigner_balanced import GroupAssignerBalanced
from .infrastructure_layer.domain_implementations.group_assigner_first_choice_only import GroupAssignerFirstChoiceOnly
from .infrastructure_layer.domain_implementations.group_assigner_ga import GroupAssignerGA
from .infrastructure_layer.domain_implementations.group_assigner_multi import GroupAssignerMulti
from .infrastructure_layer.domain_implementations.group_assigner_preference_first import GroupAssignerPreferenceFirst
from .infrastructure_layer.domain_implementations.group_assigner_random import GroupAssignerRandom
from .infrastructure_layer.domain_implementations.group_assigner_round_robin import GroupAssignerRoundRobin
from .infrastructure_layer.helper.seeded_random import RandomSourceFactory, build_random_source

logger = logging.getLogger(__name__)


def build_group_assigner(
    preference_repository: PreferenceRepository,
    default_id: AlgorithmId = AlgorithmId.BALANCED,
    random_source: RandomSourceFactory = build_random_source,
    evaluation_algorithm: Optional[PreferenceSatisfactionEvaluationAlgorithm] = None,
) -> GroupAssignerMulti:
    """Registry of every strategy keyed by AlgorithmId."""
    evaluation_algorithm = evaluation_algorithm or PreferenceSatisfactionEvaluationAlgorithm()
    assigners = {
        AlgorithmId.BALANCED: GroupAssignerBalanced(preference_repository, random_source),
        AlgorithmId.FIRST_CHOICE_ONLY: GroupAssignerFirstChoiceOnly(preference_repository, random_source),
        AlgorithmId.RANDOM: GroupAssignerRandom(preference_repository, random_source),
        AlgorithmId.ROUND_ROBIN: GroupAssignerRoundRobin(preference_repository, random_source),
        AlgorithmId.PREFERENCE_FIRST: GroupAssignerPreferenceFirst(preference_repository, random_source),
        AlgorithmId.SIMULATED_ANNEALING: GroupAssignerAnnealing(
            preference_repository, random_source, evaluation_algorithm=evaluation_algorithm
        ),
        AlgorithmId.GENETIC: GroupAssignerGA(
            preference_repository, random_source, evaluation_algorithm=evaluation_algorithm
        ),
    }
    return GroupAssignerMulti(assigners, default_id)


def resolve_default_algorithm(value: str) -> AlgorithmId:
    algorithm_id = AlgorithmId.find(value)
    if algorithm_id is None:
        logger.warning(f"Unknown default algorithm {value!r} in settings, using {AlgorithmId.BALANCED.as_str()}")
        return AlgorithmId.BALANCED
    return algorithm_id


class GroupingModule(Module):
    def __init__(self, preference_repository: PreferenceRepository, default_algorithm: Optional[str] = None):
        self._preference_repository = preference_repository
        self._default_id = resolve_default_algorithm(default_algorithm or settings.default_algorithm)

    @singleton
    @provider
    def provide_preference_repository(self) -> PreferenceRepository:
        return self._preference_repository

    @singleton
    @provider
    def provide_evaluation_algorithm(self) -> PreferenceSatisfactionEvaluationAlgorithm:
        return PreferenceSatisfactionEvaluationAlgorithm()

    @singleton
    @provider
    def provide_group_assigner(
        self,
        preference_repository: PreferenceRepository,
        evaluation_algorithm: PreferenceSatisfactionEvaluationAlgorithm,
    ) -> GroupAssigner:
        return build_group_assigner(preference_repository, self._default_id, evaluation_algorithm=evaluation_algorithm)

    @provider
    def provide_get_groups_usecase(
        self,
        group_assigner: GroupAssigner,
        evaluation_algorithm: PreferenceSatisfactionEvaluationAlgorithm,
    ) -> GetGroupsUseCase:
        return GetGroupsUseCaseFactory.create(group_assigner, evaluation_algorithm)

    @provider
    def provide_generate_candidates_usecase(
        self,
        group_assigner: GroupAssigner,
        evaluation_algorithm: PreferenceSatisfactionEvaluationAlgorithm,
    ) -> GenerateCandidatesUseCase:
        return GetGroupsUseCaseFactory.create_candidates(group_assigner, evaluation_algorithm)


def create_injector(preference_repository: PreferenceRepository, default_algorithm: Optional[str] = None) -> Injector:
    return Injector([GroupingModule(preference_repository, default_algorithm)])
