import pytest
from pydantic import ValidationError

from storyprompt_cli.generators.build_json import build_json
from storyprompt_cli.models import JSONOutput
from storyprompt_cli.store import PromptStore


def test_fresh_store_defaults():
    store = PromptStore()
    out = store.build()
    assert out.task == ""
    assert out.story_config.genre == "fantasy"
    assert out.limits.min_words == 75
    assert store.generated_json is None and store.is_generating is False


def test_setters_flow_into_output():
    store = PromptStore()
    store.set_main_task("Write a story")
    store.add_rule("no violence")
    store.add_rule("third person")
    store.set_genre("sci-fi")
    store.set_plot("a heist")
    store.set_specifics(["robots", "moon"])
    store.set_vulgar(True)
    store.set_cussing(True)
    store.set_min_words(10)
    store.set_max_words(20)
    store.set_max_chapters(2)
    store.set_uniqueness(55)

    raw = store.build().to_dict()
    assert raw["task"] == "Write a story"
    assert raw["rules"] == ["no violence", "third person"]
    assert raw["storyConfig"] == {"genre": "sci-fi", "plot": "a heist", "specifics": ["robots", "moon"]}
    assert raw["moderation"] == {"allowVulgar": True, "allowCussing": True}
    assert raw["limits"] == {"minWords": 10, "maxWords": 20, "maxChapters": 2, "uniqueness": 55}


def test_delete_rule():
    store = PromptStore()
    for r in ("a", "b", "c"):
        store.add_rule(r)
    store.delete_rule(1)
    assert store.state.rules == ["a", "c"]
    store.delete_rule(9)
    store.delete_rule(-1)
    assert store.state.rules == ["a", "c"]


def test_invalid_limit_rejected():
    store = PromptStore()
    with pytest.raises(ValidationError):
        store.set_max_words(-5)
    assert store.state.limits.max_words == 125


def test_load_from_output_is_inverse(sample_output_dict):
    data = JSONOutput.model_validate(sample_output_dict)
    store = PromptStore()
    store.load_from_output(data)
    assert store.generated_json is data
    assert store.state.limits.chapters == 3
    assert build_json(store.state) == data


def test_generation_state():
    store = PromptStore()
    store.set_is_generating(True)
    store.set_generation_error("boom")
    assert store.is_generating and store.generation_error == "boom"
    store.reset_generation()
    assert (store.generated_json, store.is_generating, store.generation_error) == (None, False, None)


def test_stores_are_independent():
    a, b = PromptStore(), PromptStore()
    a.add_rule("only in a")
    assert b.state.rules == []


def test_generated_toon_cleared_on_reset(sample_output_dict):
    store = PromptStore()
    store.load_from_output(JSONOutput.model_validate(sample_output_dict))
    store.set_generated_toon("STORY {\n}")
    assert store.generated_toon == "STORY {\n}"
    store.reset_generation()
    assert store.generated_toon is None and store.generated_json is None
