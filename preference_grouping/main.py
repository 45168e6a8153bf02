import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .application_layer.usecases.get_groups_usecase import GetGroupsUseCase
from .config.settings import settings
from .container import create_injector
from .presentation_layer.factories.group_assignment_result_formatter_factory import GroupAssignmentResultFormatterFactory
from .presentation_layer.input_converter.get_groups_params_converter import GetGroupsParamsConverter
from .presentation_layer.output_formatter.result_postprocessor import add_group_size_stats
from .presentation_layer.repository_impls.preference_repository_impl import PreferenceRepositoryImpl

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    try:
        # 外部入力ファイルから読み込む
        input_path = Path(argv[0]) if argv else Path(settings.input_path)
        data = PreferenceRepositoryImpl.read_json(input_path)
        params = GetGroupsParamsConverter.convert_json_to_params(data)
        repository = PreferenceRepositoryImpl.of(params.scenario_owner_id, data.get("preferences"))

        injector = create_injector(repository)
        usecase = injector.get(GetGroupsUseCase)

        # ユースケースを実行
        result = asyncio.run(usecase.execute(params))

        # 結果を整形
        formatter = GroupAssignmentResultFormatterFactory.create()
        formatted_result = formatter.format_result(result["outcome"], result["metrics"], result["evaluation_score"])
        add_group_size_stats(formatted_result)

        # コンソール出力
        print(formatter.format_for_console(formatted_result))

        # 出力先フォルダを作成し、ファイルに保存
        outputs_dir = Path(settings.output_dir)
        outputs_dir.mkdir(parents=True, exist_ok=True)
        out_path = outputs_dir / "result.json"
        formatter.save_to_file(formatted_result, out_path)
        logger.info(f"Result written to {out_path}")

        return 0 if result["outcome"].success else 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
