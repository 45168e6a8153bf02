import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from .group_assigner_base import CapacityExhaustedError, PreferenceGroupAssigner, place_round_robin
from ..helper.seeded_random import RandomSourceFactory, build_random_source, derive_seed, fisher_yates
from ...application_layer.repository_interfaces.preference_repository import PreferenceRepository
from ...domain_layer.first_class_collections.groups import Groups
from ...domain_layer.first_class_collections.preferences import Preferences
from ...domain_layer.services.evaluation_algorithm import EvaluationAlgorithm, PreferenceSatisfactionEvaluationAlgorithm
from ...domain_layer.value_objects.grouping_config import GroupingConfig
from ...domain_layer.value_objects.grouping_outcome import GroupingOutcome

logger = logging.getLogger(__name__)


@dataclass
class Genome:
    order: List[str]
    score: float


class GroupAssignerGA(PreferenceGroupAssigner):
    """
    Group assigner using Genetic Algorithm (GA).

    A genome is an ordering of the participants; its phenotype is that
    ordering placed round-robin into the groups. Fitness is the evaluation
    algorithm's score of the phenotype.
    """

    def __init__(
        self,
        preference_repository: Optional[PreferenceRepository] = None,
        random_source: RandomSourceFactory = build_random_source,
        evaluation_algorithm: Optional[EvaluationAlgorithm] = None,
        min_population: int = 6,
        max_population: int = 12,
        min_generations: int = 4,
        max_generations: int = 8,
        mutation_rate: float = 0.2,
        elite_count: int = 2,
        sub_seed_stride: int = 13,
    ):
        super().__init__(preference_repository, random_source)
        self.evaluation_algorithm = evaluation_algorithm or PreferenceSatisfactionEvaluationAlgorithm()
        self.min_population = min_population
        self.max_population = max_population
        self.min_generations = min_generations
        self.max_generations = max_generations
        self.mutation_rate = mutation_rate
        self.elite_count = elite_count
        self.sub_seed_stride = sub_seed_stride

    def population_size_for(self, participant_count: int) -> int:
        return min(self.max_population, max(self.min_population, math.ceil(participant_count / 4)))

    def generations_for(self, participant_count: int) -> int:
        return min(self.max_generations, max(self.min_generations, math.ceil(participant_count / 10)))

    def _assign(
        self,
        scenario_owner_id: str,
        participant_ids: List[str],
        config: GroupingConfig,
        preferences: Preferences,
    ) -> GroupingOutcome:
        seed = config.seed if config.has_seed() else derive_seed(scenario_owner_id)
        rng = self._random_source(seed)
        base_groups = self._build_groups(len(participant_ids), config)

        # 定員不足は探索前に一度だけ判定する
        _, unplaced = place_round_robin(participant_ids, base_groups.empty_copy())
        if unplaced:
            raise CapacityExhaustedError(unplaced)

        population_size = self.population_size_for(len(participant_ids))
        generations = self.generations_for(len(participant_ids))
        logger.info(f"GA: seed={seed}, population={population_size}, generations={generations}")

        def build_phenotype(order: List[str]) -> Groups:
            """
            順序をラウンドロビンで配置する（入りきらない場合は途中まで）
            """
            groups = base_groups.empty_copy()
            place_round_robin(order, groups)
            return groups

        def fitness(order: List[str]) -> float:
            """
            個体の適応度（最大化）
            """
            return self.evaluation_algorithm.evaluate(build_phenotype(order), preferences, participant_ids)

        def select_parent(pool: List[Genome]) -> Genome:
            """
            2者トーナメント選択
            """
            candidate = pool[math.floor(rng.random() * len(pool))]
            contender = pool[math.floor(rng.random() * len(pool))]
            return contender if contender.score > candidate.score else candidate

        def crossover(parent_a: List[str], parent_b: List[str]) -> List[str]:
            """
            交叉操作: 親Aの連続区間 + 親Bの残り（親Bの順序）
            """
            size = len(parent_a)
            start = math.floor(rng.random() * size)
            end = min(size, start + math.floor(rng.random() * (size - start)))
            segment = parent_a[start:end]
            taken = set(segment)
            return segment + [pid for pid in parent_b if pid not in taken]

        def mutate(order: List[str]) -> List[str]:
            """
            突然変異操作: 2点の入れ替え
            """
            if rng.random() > self.mutation_rate:
                return order
            mutated = list(order)
            i = math.floor(rng.random() * len(mutated))
            j = math.floor(rng.random() * len(mutated))
            mutated[i], mutated[j] = mutated[j], mutated[i]
            return mutated

        # Initialize population
        population: List[Genome] = []
        for index in range(population_size):
            order = fisher_yates(participant_ids, self._random_source(seed + index * self.sub_seed_stride))
            population.append(Genome(order, fitness(order)))

        tournament_size = max(3, population_size // 2)
        for generation in range(generations):
            population.sort(key=lambda genome: genome.score, reverse=True)
            next_population = population[:self.elite_count]
            pool = population[:tournament_size]
            while len(next_population) < population_size:
                parent_a = select_parent(pool)
                parent_b = select_parent(pool)
                child = mutate(crossover(parent_a.order, parent_b.order))
                next_population.append(Genome(child, fitness(child)))
            population = next_population
            logger.debug(f"GA generation {generation}: best={max(g.score for g in population):.3f}")

        population.sort(key=lambda genome: genome.score, reverse=True)
        best = population[0]
        logger.info(f"GA: best score {best.score:.3f}")
        return GroupingOutcome.succeeded(build_phenotype(best.order))
