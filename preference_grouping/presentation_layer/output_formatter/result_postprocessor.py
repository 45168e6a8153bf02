from typing import Dict, Any


def add_group_size_stats(formatted_result: Dict[str, Any]) -> None:
    """formatted_result['evaluation'] にグループサイズの平均と分散を付加する。in-place更新。"""
    evaluation = formatted_result.get("evaluation", {})
    sizes = [len(group["memberIds"]) for group in formatted_result.get("groups", [])]
    if not sizes:
        return
    mean_val = sum(sizes) / len(sizes)
    var_val = sum((s - mean_val) ** 2 for s in sizes) / len(sizes)
    evaluation["group_size_avg"] = mean_val
    evaluation["group_size_variance"] = var_val
    formatted_result["evaluation"] = evaluation
