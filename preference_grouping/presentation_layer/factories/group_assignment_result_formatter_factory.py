from ..output_formatter.group_assignment_result_formatter import GroupAssignmentResultFormatter
from ...config.settings import settings


class GroupAssignmentResultFormatterFactory:
    """GroupAssignmentResultFormatterのファクトリークラス"""

    @staticmethod
    def create() -> GroupAssignmentResultFormatter:
        """GroupAssignmentResultFormatterのインスタンスを作成"""
        return GroupAssignmentResultFormatter(indent=settings.json_indent)
