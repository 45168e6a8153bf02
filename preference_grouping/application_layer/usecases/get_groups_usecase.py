import logging
from typing import Any, Dict

from ..input_params.get_groups_params import GetGroupsParams
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.services.evaluation_algorithm import PreferenceSatisfactionEvaluationAlgorithm
from ...domain_layer.services.group_assigner import GroupAssigner

logger = logging.getLogger(__name__)


class GetGroupsUseCase:
    """グループ割り当てと評価を実行するユースケース"""

    def __init__(
        self,
        group_assigner: GroupAssigner,
        evaluation_algorithm: PreferenceSatisfactionEvaluationAlgorithm,
    ):
        self._group_assigner = group_assigner
        self._evaluation_algorithm = evaluation_algorithm

    async def execute(self, params: GetGroupsParams) -> Dict[str, Any]:
        """グループ割り当てを実行し、結果を評価して返す"""
        # グループ割り当てを実行
        outcome = await self._group_assigner.assign_groups(
            params.scenario_owner_id,
            params.participant_ids,
            params.algorithm_config,
        )
        if not outcome.success:
            logger.info(f"Grouping failed for {params.scenario_owner_id}: {outcome.message}")

        # 評価スコアを計算（失敗時も部分的な割り当てを評価する）
        # 希望を読む前に止まった結果はグループが空なので、空の希望で評価できる
        preferences = outcome.preferences if outcome.preferences is not None else Preferences.empty()
        metrics = self._evaluation_algorithm.compute_metrics(outcome.groups, preferences, params.participant_ids)
        score = self._evaluation_algorithm.score(metrics)

        # 結果を返す
        return {
            "outcome": outcome,
            "metrics": metrics,
            "evaluation_score": score,
        }
