import logging

from preference_grouping.application_layer.factories.preference_factory import PreferenceFactory
from preference_grouping.domain_layer.entities.preference_record import PreferenceRecord


def test_well_formed_payload():
    preference = PreferenceFactory.create_preference(
        {"likeGroupIds": ["G2", "G1"], "avoidStudentIds": ["x"], "meta": {"note": "hi"}}, "s1"
    )
    assert preference.student_id == "s1"
    assert preference.like_group_ids == ["G2", "G1"]
    assert preference.top_choice() == "G2"
    assert preference.avoid_student_ids == ["x"]
    assert preference.meta == {"note": "hi"}


def test_fields_are_coerced_one_by_one(caplog):
    with caplog.at_level(logging.WARNING):
        preference = PreferenceFactory.create_preference(
            {"likeGroupIds": "G1", "likeStudentIds": ["ok", 3, None], "avoidGroupIds": ["G9"]}, "s1"
        )
    assert preference.like_group_ids == []
    assert preference.like_student_ids == ["ok"]
    assert preference.avoid_group_ids == ["G9"]
    assert "likeGroupIds" in caplog.text


def test_unreadable_payload_becomes_empty(caplog):
    with caplog.at_level(logging.WARNING):
        preference = PreferenceFactory.create_preference("not a dict", "s1")
    assert preference.student_id == "s1"
    assert preference.like_group_ids == []
    assert "Failed to parse preferences for student s1" in caplog.text


def test_duplicate_choices_are_kept():
    preference = PreferenceFactory.create_preference({"likeGroupIds": ["G1", "G1"]}, "s1")
    assert preference.like_group_ids == ["G1", "G1"]


def test_build_preferences_filters_and_fills():
    records = [
        PreferenceRecord.of("p", "a", {"likeGroupIds": ["G1"]}),
        PreferenceRecord.of("p", "outsider", {"likeGroupIds": ["G2"]}),
    ]
    preferences = PreferenceFactory.build_preferences(records, ["a", "b"])
    assert len(preferences.by_student_id) == 2
    assert preferences.choices_of("a") == ["G1"]
    assert preferences.choices_of("b") == []
    assert "outsider" not in preferences
