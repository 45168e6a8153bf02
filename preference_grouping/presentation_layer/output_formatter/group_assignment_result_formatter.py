import json
from typing import Any, Dict
from pathlib import Path

from ...domain_layer.services.evaluation_algorithm import SatisfactionMetrics
from ...domain_layer.value_objects.grouping_outcome import GroupingOutcome


class GroupAssignmentResultFormatter:
    """グループ割り当て結果を整形するクラス"""

    def __init__(self, indent: int = 2):
        self._indent = indent

    def format_result(self, outcome: GroupingOutcome, metrics: SatisfactionMetrics, evaluation_score: float) -> Dict[str, Any]:
        """結果を整形して辞書形式で返す"""
        result = outcome.convert_to_json()

        # グループごとの定員充足状況
        fill = {}
        for group in outcome.groups:
            fill[group.name] = {
                "size": group.size(),
                "capacity": group.capacity,
                "overCapacity": group.is_over_capacity(),
            }

        result["evaluation"] = {
            **metrics.convert_to_json(),
            "score": evaluation_score,
            "groupFill": fill,
        }
        return result

    def format_candidates(self, result: Dict[str, Any]) -> Dict[str, Any]:
        """候補生成の結果を整形して辞書形式で返す"""
        if not result["success"]:
            return {
                "success": False,
                "candidates": [],
                "message": result["message"],
                "reason": result["reason"].as_str(),
                "algorithmId": result["algorithm_id"].as_str(),
            }

        candidates = []
        for candidate in result["candidates"]:
            algorithm_id = candidate["algorithm_id"]
            formatted = self.format_result(candidate["outcome"], candidate["metrics"], candidate["evaluation_score"])
            candidates.append({
                "id": candidate["id"],
                "algorithmId": algorithm_id.as_str(),
                "algorithmLabel": algorithm_id.label(),
                "algorithmConfig": candidate["algorithm_config"],
                **formatted,
            })
        return {"success": True, "candidates": candidates}

    def format_for_console(self, result: Dict[str, Any]) -> str:
        """コンソール出力用に整形"""
        output = json.dumps(result, ensure_ascii=False, indent=self._indent)
        evaluation = result["evaluation"]
        output += f"\n評価値(score): {evaluation['score']:.3f}"
        output += f"\n第1希望の割合(percentAssignedTopChoice): {evaluation['percentAssignedTopChoice']:.1f}%"
        average_rank = evaluation["averagePreferenceRankAssigned"]
        output += f"\n平均希望順位(averagePreferenceRankAssigned): {'-' if average_rank is None else f'{average_rank:.2f}'}"
        if not result["success"]:
            output += f"\n失敗: {result['message']}"
        return output

    def save_to_file(self, result: Dict[str, Any], file_path: Path) -> None:
        """結果をファイルに保存"""
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(result, f, ensure_ascii=False, indent=self._indent)
