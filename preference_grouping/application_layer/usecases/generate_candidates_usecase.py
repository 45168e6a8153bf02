import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from ..input_params.generate_candidates_params import GenerateCandidatesParams
from ..input_params.get_groups_params import GetGroupsParams
from .get_groups_usecase import GetGroupsUseCase
from ...domain_layer.value_objects.algorithm_id import AlgorithmId
from ...domain_layer.value_objects.grouping_outcome import FailureReason
from ...infrastructure_layer.helper.seeded_random import derive_seed
from ...infrastructure_layer.helper.ulid_helper import ULIDHelper

logger = logging.getLogger(__name__)

CANDIDATE_ALGORITHMS = (
    AlgorithmId.BALANCED,
    AlgorithmId.RANDOM,
    AlgorithmId.ROUND_ROBIN,
    AlgorithmId.PREFERENCE_FIRST,
)
CANDIDATE_SEED_STRIDE = 9973


class GenerateCandidatesUseCase:
    """
    複数の候補グループ分けを生成するユースケース（保存はしない）

    候補 i は ``seed_base + i * 9973`` のシードと、balanced / random /
    round-robin / preference-first を順番に回したアルゴリズムで生成する。
    いずれかの候補が失敗した時点で打ち切る。
    """

    def __init__(self, get_groups_usecase: GetGroupsUseCase):
        self._get_groups_usecase = get_groups_usecase

    @staticmethod
    def seed_base_for(scenario_owner_id: str, algorithm_config: Any) -> int:
        """設定のseedがあればそれを、なければシナリオIDから導出する"""
        if isinstance(algorithm_config, Mapping):
            seed = algorithm_config.get("seed")
            if isinstance(seed, int) and not isinstance(seed, bool):
                return seed
        return derive_seed(scenario_owner_id)

    @staticmethod
    def candidate_config(algorithm_config: Any, seed: int, algorithm_id: AlgorithmId) -> Dict[str, Any]:
        config = copy.deepcopy(dict(algorithm_config)) if isinstance(algorithm_config, Mapping) else {}
        config["seed"] = seed
        config["algorithm"] = algorithm_id.as_str()
        return config

    async def execute(self, params: GenerateCandidatesParams) -> Dict[str, Any]:
        seed_base = self.seed_base_for(params.scenario_owner_id, params.algorithm_config)
        logger.info(f"Generating {params.count} candidates for {params.scenario_owner_id} (seed base {seed_base})")

        candidates: List[Dict[str, Any]] = []
        for index in range(params.count):
            seed = seed_base + index * CANDIDATE_SEED_STRIDE
            algorithm_id = CANDIDATE_ALGORITHMS[index % len(CANDIDATE_ALGORITHMS)]
            config = self.candidate_config(params.algorithm_config, seed, algorithm_id)

            result = await self._get_groups_usecase.execute(
                GetGroupsParams.of(params.scenario_owner_id, params.participant_ids, config)
            )
            outcome = result["outcome"]
            if not outcome.success:
                logger.info(f"Candidate {index} ({algorithm_id.as_str()}) failed: {outcome.message}")
                return self._failed(outcome.message, algorithm_id)

            candidates.append({
                "id": ULIDHelper.generate(),
                "algorithm_id": algorithm_id,
                "algorithm_config": config,
                "outcome": outcome,
                "metrics": result["metrics"],
                "evaluation_score": result["evaluation_score"],
            })

        return {"success": True, "candidates": candidates}

    @staticmethod
    def _failed(message: Optional[str], algorithm_id: AlgorithmId) -> Dict[str, Any]:
        return {
            "success": False,
            "candidates": [],
            "message": message,
            "reason": FailureReason.GROUPING_ALGORITHM_FAILED,
            "algorithm_id": algorithm_id,
        }
