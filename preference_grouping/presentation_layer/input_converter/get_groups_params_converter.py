from ...application_layer.input_params.generate_candidates_params import GenerateCandidatesParams
from ...application_layer.input_params.get_groups_params import GetGroupsParams
from ...domain_layer.value_objects.participant_id import ParticipantId, ParticipantIdValidationError

MAX_CANDIDATE_COUNT = 20

class GetGroupsParamsConverter:
    @staticmethod
    def convert_json_to_params(params) -> GetGroupsParams:
        # Check if params is None
        if params is None:
            raise MissingParameterError("Missing parameter: params")
        if not isinstance(params, dict):
            raise AttributeTypeError("Request body must be an object")

        # Check if params has the required attributes
        if "scenarioOwnerId" not in params or params["scenarioOwnerId"] is None:
            raise MissingParameterError("Missing parameter: scenarioOwnerId")
        if "participantIds" not in params or params["participantIds"] is None:
            raise MissingParameterError("Missing parameter: participantIds")

        if not isinstance(params["scenarioOwnerId"], str):
            raise AttributeTypeError("Attribute scenarioOwnerId must be a string")
        if not isinstance(params["participantIds"], list):
            raise AttributeTypeError("Attribute participantIds must be a list")

        algorithm_config = params.get("algorithmConfig")
        if algorithm_config is not None and not isinstance(algorithm_config, dict):
            raise AttributeTypeError("Attribute algorithmConfig must be an object")

        participant_ids = []
        for value in params["participantIds"]:
            try:
                participant_ids.append(ParticipantId.of(value).as_str())
            except ParticipantIdValidationError as e:
                raise AttributeTypeError(f"Invalid participant id: {e.message}") from e

        return GetGroupsParams.of(
            scenario_owner_id=params["scenarioOwnerId"],
            participant_ids=participant_ids,
            algorithm_config=algorithm_config,
        )

    @staticmethod
    def convert_json_to_candidates_params(params) -> GenerateCandidatesParams:
        group_params = GetGroupsParamsConverter.convert_json_to_params(params)

        count = params.get("count")
        if count is not None:
            if not isinstance(count, int) or isinstance(count, bool):
                raise AttributeTypeError("Attribute count must be an integer")
            if count > MAX_CANDIDATE_COUNT:
                raise AttributeTypeError(f"Attribute count must be at most {MAX_CANDIDATE_COUNT}")

        return GenerateCandidatesParams.of(
            scenario_owner_id=group_params.scenario_owner_id,
            participant_ids=group_params.participant_ids,
            algorithm_config=group_params.algorithm_config,
            count=count,
        )

class MissingParameterError(Exception):
    """
    Exception raised when a required parameter is missing.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class AttributeTypeError(Exception):
    """
    Exception raised when an attribute has the wrong type.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
