import logging
import math
from typing import List, Optional

from .group_assigner_base import CapacityExhaustedError, PreferenceGroupAssigner, place_round_robin
from ..helper.seeded_random import RandomSourceFactory, build_random_source, derive_seed, fisher_yates
from ...application_layer.repository_interfaces.preference_repository import PreferenceRepository
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.services.evaluation_algorithm import EvaluationAlgorithm, PreferenceSatisfactionEvaluationAlgorithm
from ...domain_layer.value_objects.grouping_config import GroupingConfig
from ...domain_layer.value_objects.grouping_outcome import GroupingOutcome

logger = logging.getLogger(__name__)


class GroupAssignerAnnealing(PreferenceGroupAssigner):
    """
    Group assigner using simulated annealing over pairwise swaps.

    Starts from a seeded round-robin placement and returns the best
    configuration seen during the run, which is not necessarily the final
    annealed state.
    """

    def __init__(
        self,
        preference_repository: Optional[PreferenceRepository] = None,
        random_source: RandomSourceFactory = build_random_source,
        evaluation_algorithm: Optional[EvaluationAlgorithm] = None,
        max_iterations: int = 400,
        iterations_per_participant: int = 12,
        initial_temperature: float = 1.0,
        cooling_rate: float = 0.95,
        min_temperature: float = 0.01,
    ):
        super().__init__(preference_repository, random_source)
        self.evaluation_algorithm = evaluation_algorithm or PreferenceSatisfactionEvaluationAlgorithm()
        self.max_iterations = max_iterations
        self.iterations_per_participant = iterations_per_participant
        self.initial_temperature = initial_temperature
        self.cooling_rate = cooling_rate
        self.min_temperature = min_temperature

    def iterations_for(self, participant_count: int) -> int:
        return max(0, min(self.max_iterations, participant_count * self.iterations_per_participant))

    def _assign(
        self,
        scenario_owner_id: str,
        participant_ids: List[str],
        config: GroupingConfig,
        preferences: Preferences,
    ) -> GroupingOutcome:
        seed = config.seed if config.has_seed() else derive_seed(scenario_owner_id)
        rng = self._random_source(seed)
        groups = self._build_groups(len(participant_ids), config)

        # 初期解: シャッフル順をラウンドロビン配置
        order = fisher_yates(participant_ids, self._random_source(seed))
        _, unplaced = place_round_robin(order, groups)
        if unplaced:
            raise CapacityExhaustedError(unplaced)

        membership = groups.membership()

        def evaluate() -> float:
            return self.evaluation_algorithm.evaluate(groups, preferences, participant_ids)

        iterations = self.iterations_for(len(participant_ids))
        temperature = self.initial_temperature
        current_score = evaluate()
        best_score = current_score
        best_groups = groups.deep_copy()
        accepted = 0
        logger.info(f"Annealing: seed={seed}, iterations={iterations}, initial score={current_score:.3f}")

        count = len(participant_ids)
        for _ in range(iterations):
            a_index = math.floor(rng.random() * count)
            b_index = math.floor(rng.random() * count)
            if b_index == a_index:
                b_index = (b_index + 1) % count

            student_a = participant_ids[a_index]
            student_b = participant_ids[b_index]
            group_a = membership.get(student_a)
            group_b = membership.get(student_b)
            if group_a is None or group_b is None or group_a is group_b:
                temperature = max(self.min_temperature, temperature * self.cooling_rate)
                continue

            index_a = group_a.member_ids.index(student_a)
            index_b = group_b.member_ids.index(student_b)
            group_a.member_ids[index_a] = student_b
            group_b.member_ids[index_b] = student_a
            membership[student_a] = group_b
            membership[student_b] = group_a

            candidate_score = evaluate()
            delta = candidate_score - current_score
            if delta > 0 or math.exp(delta / temperature) > rng.random():
                current_score = candidate_score
                accepted += 1
                if candidate_score > best_score:
                    best_score = candidate_score
                    best_groups = groups.deep_copy()
            else:
                # 元に戻す
                group_a.member_ids[index_a] = student_a
                group_b.member_ids[index_b] = student_b
                membership[student_a] = group_a
                membership[student_b] = group_b

            temperature = max(self.min_temperature, temperature * self.cooling_rate)

        logger.info(f"Annealing: accepted {accepted}/{iterations} swaps, best score {best_score:.3f}")
        return GroupingOutcome.succeeded(best_groups)
