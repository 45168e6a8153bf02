from ..usecases.generate_candidates_usecase import GenerateCandidatesUseCase
from ..usecases.get_groups_usecase import GetGroupsUseCase
from ...domain_layer.services.evaluation_algorithm import PreferenceSatisfactionEvaluationAlgorithm
from ...domain_layer.services.group_assigner import GroupAssigner


class GetGroupsUseCaseFactory:
    """GetGroupsUseCaseのファクトリークラス"""

    @staticmethod
    def create(
        group_assigner: GroupAssigner,
        evaluation_algorithm: PreferenceSatisfactionEvaluationAlgorithm,
    ) -> GetGroupsUseCase:
        """GetGroupsUseCaseのインスタンスを作成"""
        return GetGroupsUseCase(
            group_assigner=group_assigner,
            evaluation_algorithm=evaluation_algorithm,
        )

    @staticmethod
    def create_candidates(
        group_assigner: GroupAssigner,
        evaluation_algorithm: PreferenceSatisfactionEvaluationAlgorithm,
    ) -> GenerateCandidatesUseCase:
        """GenerateCandidatesUseCaseのインスタンスを作成"""
        return GenerateCandidatesUseCase(
            get_groups_usecase=GetGroupsUseCaseFactory.create(group_assigner, evaluation_algorithm),
        )
