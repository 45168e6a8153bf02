from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..entities.group import Group
from ..first_class_collections.groups import Groups
from ..first_class_collections.preferences import Preferences

WORST_CASE_RANK = 10.0


@dataclass(frozen=True)
class SatisfactionMetrics:
    """
    Preference satisfaction of one assignment.

    Percentages are in [0, 100]. ``average_preference_rank_assigned`` is the
    mean 1-based rank of the assigned group, or None when nobody got any of
    their ranked choices.
    """
    percent_assigned_top_choice: float
    average_preference_rank_assigned: Optional[float]
    percent_assigned_top2: float
    assigned_count: int = 0
    ranked_count: int = 0

    def has_rank(self) -> bool:
        return self.average_preference_rank_assigned is not None

    def convert_to_json(self) -> dict:
        return {
            "percentAssignedTopChoice": self.percent_assigned_top_choice,
            "averagePreferenceRankAssigned": self.average_preference_rank_assigned,
            "percentAssignedTop2": self.percent_assigned_top2,
        }


@dataclass(frozen=True)
class WorstCaseRankPolicy:
    """Substitutes a fixed worst rank when no rank could be measured."""
    worst_rank: float = WORST_CASE_RANK

    def resolve(self, average_rank: Optional[float]) -> float:
        if average_rank is None:
            return self.worst_rank
        return average_rank


@dataclass(frozen=True)
class ScoreWeights:
    top_choice: float = 2.0
    top2: float = 1.0
    average_rank: float = 10.0

    def combine(self, metrics: SatisfactionMetrics, average_rank: float) -> float:
        return (
            metrics.percent_assigned_top_choice * self.top_choice
            + metrics.percent_assigned_top2 * self.top2
            - average_rank * self.average_rank
        )


class EvaluationAlgorithm(ABC):
    """評価アルゴリズムの抽象クラス"""

    @abstractmethod
    def evaluate(self, groups: Groups, preferences: Preferences, participant_ids: Iterable[str]) -> float:
        """グループ割り当て結果を評価してスコアを返す（大きいほど良い）"""
        pass


class PreferenceSatisfactionEvaluationAlgorithm(EvaluationAlgorithm):
    """希望グループの満足度から適応度を計算する評価アルゴリズム"""

    def __init__(self, weights: Optional[ScoreWeights] = None, unranked_policy: Optional[WorstCaseRankPolicy] = None):
        self._weights = weights or ScoreWeights()
        self._unranked_policy = unranked_policy or WorstCaseRankPolicy()

    def evaluate(self, groups: Groups, preferences: Preferences, participant_ids: Iterable[str]) -> float:
        metrics = self.compute_metrics(groups, preferences, participant_ids)
        return self.score(metrics)

    def score(self, metrics: SatisfactionMetrics) -> float:
        average_rank = self._unranked_policy.resolve(metrics.average_preference_rank_assigned)
        return self._weights.combine(metrics, average_rank)

    def compute_metrics(self, groups: Groups, preferences: Preferences, participant_ids: Iterable[str]) -> SatisfactionMetrics:
        membership = groups.membership()
        # 重複IDは1人として数える
        assigned: List[str] = [pid for pid in dict.fromkeys(participant_ids) if pid in membership]
        if not assigned:
            return SatisfactionMetrics(0.0, None, 0.0)

        top_choice_count = 0
        top2_count = 0
        total_rank = 0
        ranked_count = 0
        for pid in assigned:
            rank = self.rank_of(preferences.choices_of(pid), membership[pid])
            if rank is None:
                continue
            ranked_count += 1
            total_rank += rank
            if rank == 1:
                top_choice_count += 1
            if rank <= 2:
                top2_count += 1

        return SatisfactionMetrics(
            percent_assigned_top_choice=top_choice_count / len(assigned) * 100,
            average_preference_rank_assigned=(total_rank / ranked_count) if ranked_count else None,
            percent_assigned_top2=top2_count / len(assigned) * 100,
            assigned_count=len(assigned),
            ranked_count=ranked_count,
        )

    @staticmethod
    def rank_of(choices: List[str], group: Group) -> Optional[int]:
        """1-based rank of ``group`` in ``choices`` or None if it was not chosen."""
        for index, choice in enumerate(choices):
            if group.matches(choice):
                return index + 1
        return None
