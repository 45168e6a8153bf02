from typing import Optional

from flask import Flask, jsonify, request

from .application_layer.usecases.generate_candidates_usecase import GenerateCandidatesUseCase
from .application_layer.usecases.get_groups_usecase import GetGroupsUseCase
from .container import create_injector
from .domain_layer.value_objects.algorithm_id import AlgorithmId
from .presentation_layer.factories.group_assignment_result_formatter_factory import GroupAssignmentResultFormatterFactory
from .presentation_layer.input_converter.get_groups_params_converter import (
    AttributeTypeError,
    GetGroupsParamsConverter,
    MissingParameterError,
)
from .presentation_layer.output_formatter.result_postprocessor import add_group_size_stats
from .presentation_layer.repository_impls.preference_repository_impl import PreferenceRepositoryImpl


def create_app(default_algorithm: Optional[str] = None) -> Flask:
    app = Flask(__name__)

    @app.route("/")
    def index():
        return "index page"

    @app.route("/algorithms", methods=["GET"])
    def list_algorithms():
        return jsonify([
            {"id": a.as_str(), "label": a.label(), "isSlow": a.is_slow()}
            for a in AlgorithmId
        ])

    @app.route("/group_assignment", methods=["POST"])
    async def assign_groups():
        data = request.get_json(silent=True)
        try:
            params = GetGroupsParamsConverter.convert_json_to_params(data)
            repository = PreferenceRepositoryImpl.of(params.scenario_owner_id, data.get("preferences"))
        except (MissingParameterError, AttributeTypeError, ValueError) as e:
            return jsonify({"success": False, "message": str(e)}), 400

        # リクエストごとに依存関係を組み立てる
        usecase = create_injector(repository, default_algorithm).get(GetGroupsUseCase)
        result = await usecase.execute(params)

        formatted = GroupAssignmentResultFormatterFactory.create().format_result(
            result["outcome"], result["metrics"], result["evaluation_score"]
        )
        add_group_size_stats(formatted)
        status = 200 if result["outcome"].success else 422
        return jsonify(formatted), status

    @app.route("/candidates", methods=["POST"])
    async def generate_candidates():
        data = request.get_json(silent=True)
        try:
            params = GetGroupsParamsConverter.convert_json_to_candidates_params(data)
            repository = PreferenceRepositoryImpl.of(params.scenario_owner_id, data.get("preferences"))
        except (MissingParameterError, AttributeTypeError, ValueError) as e:
            return jsonify({"success": False, "message": str(e)}), 400

        usecase = create_injector(repository, default_algorithm).get(GenerateCandidatesUseCase)
        result = await usecase.execute(params)

        formatted = GroupAssignmentResultFormatterFactory.create().format_candidates(result)
        for candidate in formatted["candidates"]:
            add_group_size_stats(candidate)
        status = 200 if formatted["success"] else 422
        return jsonify(formatted), status

    return app


app = create_app()

if __name__ == "__main__":
    app.run(debug=True)
