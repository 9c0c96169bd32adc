import pytest
from pydantic import ValidationError

from storyprompt_cli.generators.build_json import build_json
from storyprompt_cli.models import PromptState


def test_example_end_to_end(sample_state, sample_output_dict):
    assert build_json(sample_state).to_dict() == sample_output_dict


def test_accepts_model_and_mapping_alike(sample_state):
    assert build_json(PromptState.model_validate(sample_state)) == build_json(sample_state)


def test_renamed_fields(sample_state):
    sample_state["moderation"] = {"vulgar": True, "cussing": False}
    sample_state["limits"]["chapters"] = 7
    out = build_json(sample_state)
    assert out.moderation.allow_vulgar is True
    assert out.moderation.allow_cussing is False
    assert out.limits.max_chapters == 7
    raw = out.to_dict()
    assert "chapters" not in raw["limits"]
    assert raw["moderation"] == {"allowVulgar": True, "allowCussing": False}


def test_order_and_duplicates_preserved(sample_state):
    sample_state["rules"] = ["z last", "a first", "z last"]
    sample_state["story"]["specifics"] = ["c", "b", "a", "b"]
    out = build_json(sample_state)
    assert out.rules == ("z last", "a first", "z last")
    assert out.story_config.specifics == ("c", "b", "a", "b")


def test_repeated_calls_equal_but_fresh(sample_state):
    state = PromptState.model_validate(sample_state)
    first, second = build_json(state), build_json(state)
    assert first == second
    assert first is not second


def test_output_does_not_alias_state(sample_state):
    state = PromptState.model_validate(sample_state)
    out = build_json(state)
    state.rules.append("later")
    state.story.specifics.append("later")
    assert out.rules == ("no violence",)
    assert out.story_config.specifics == ("dragons",)


def test_missing_field_fails_fast(sample_state):
    del sample_state["limits"]
    with pytest.raises(ValidationError):
        build_json(sample_state)


def test_inconsistent_limits_pass_through(sample_state):
    sample_state["limits"].update(minWords=900, maxWords=10)
    out = build_json(sample_state)
    assert (out.limits.min_words, out.limits.max_words) == (900, 10)


def test_output_lists_are_immutable(sample_state):
    out = build_json(sample_state)
    with pytest.raises(AttributeError):
        out.rules.append("later")
    with pytest.raises(AttributeError):
        out.story_config.specifics.append("later")
    assert out.to_dict()["rules"] == ["no violence"]
