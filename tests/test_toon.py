from storyprompt_cli.export.toon import (
    format_rule,
    generate_toon,
    parse_toon,
    strictness_level,
    validate_toon,
)
from storyprompt_cli.models import JSONOutput

EXPECTED = """\
STORY {
  GENRE: FANTASY
  TASK: "Write a story"
  PLOT: "a quest"
  LENGTH: 100-500
  CHAPTERS: 3
  STRICTNESS: MINIMAL
  RULES:
    - "no violence"
  SPECIFICS:
    - dragons
  MODERATION:
    - NO_CUSSING
    - NO_VULGAR
    - FAMILY_FRIENDLY
}"""


def test_generate_toon_layout(sample_output_dict):
    assert generate_toon(JSONOutput.model_validate(sample_output_dict)) == EXPECTED
    assert generate_toon(sample_output_dict) == EXPECTED


def test_optional_blocks_skipped(sample_output_dict):
    sample_output_dict.update(task="", rules=[])
    sample_output_dict["storyConfig"] = {"genre": "sci-fi", "plot": "", "specifics": []}
    sample_output_dict["moderation"] = {"allowVulgar": True, "allowCussing": True}
    sample_output_dict["limits"].update(maxChapters=1, uniqueness=95)
    assert generate_toon(sample_output_dict) == "STORY {\n  GENRE: SCI_FI\n  LENGTH: 100-500\n  STRICTNESS: HIGH\n}"


def test_strictness_levels():
    assert [strictness_level(u) for u in (100, 90, 89, 70, 50, 49.5, 0)] == [
        "HIGH", "HIGH", "MEDIUM", "MEDIUM", "LOW", "MINIMAL", "MINIMAL",
    ]


def test_rules_constants_bare_others_quoted():
    assert format_rule("NO_VIOLENCE") == "NO_VIOLENCE"
    assert format_rule('say "hi"') == '"say \\"hi\\""'


def test_cussing_only_flag(sample_output_dict):
    sample_output_dict["moderation"] = {"allowVulgar": True, "allowCussing": False}
    toon = generate_toon(sample_output_dict)
    assert "    - NO_CUSSING" in toon
    assert "NO_VULGAR" not in toon and "FAMILY_FRIENDLY" not in toon


def test_parse_reads_generated_text(sample_output_dict):
    parsed = parse_toon(EXPECTED)
    assert parsed["task"] == "Write a story"
    assert parsed["rules"] == ["no violence"]
    assert parsed["storyConfig"] == sample_output_dict["storyConfig"]
    assert parsed["moderation"] == {"allowVulgar": False, "allowCussing": False}
    # uniqueness comes back as its strictness bucket
    assert parsed["limits"] == {"minWords": 100, "maxWords": 500, "maxChapters": 3, "uniqueness": 25}


def test_escapes_survive_parsing(sample_output_dict):
    sample_output_dict["task"] = 'Say "hi"\nthen \\ leave'
    sample_output_dict["rules"] = ["NO_VIOLENCE", "tabs\tok"]
    toon = generate_toon(sample_output_dict)
    assert 'TASK: "Say \\"hi\\"\\nthen \\\\ leave"' in toon
    parsed = parse_toon(toon)
    assert parsed["task"] == sample_output_dict["task"]
    assert parsed["rules"] == ["NO_VIOLENCE", "tabs\tok"]


def test_parse_defaults_allow_everything():
    parsed = parse_toon("STORY {\n  GENRE: HORROR\n}")
    assert parsed["storyConfig"]["genre"] == "horror"
    assert parsed["moderation"] == {"allowVulgar": True, "allowCussing": True}
    assert parsed["limits"]["minWords"] == 75


def test_validate_toon():
    assert validate_toon(EXPECTED) == []
    assert validate_toon("GENRE: X") == [
        'TOON must start with "STORY {"',
        'TOON must end with "}"',
        "Missing required field: LENGTH",
    ]
