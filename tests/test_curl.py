import json

from storyprompt_cli.export.curl import generate_curl
from storyprompt_cli.models import JSONOutput


def _body(cmd: str) -> str:
    start = cmd.index("-d '") + len("-d '")
    return cmd[start : cmd.rindex("'")]


def test_body_parses_back(sample_output_dict):
    out = JSONOutput.model_validate(sample_output_dict)
    cmd = generate_curl(out, "https://example.test/v1")
    assert json.loads(_body(cmd)) == sample_output_dict


def test_default_endpoint(sample_output_dict):
    assert "https://api.example.com/generate" in generate_curl(sample_output_dict)


def test_layout(sample_output_dict):
    cmd = generate_curl(sample_output_dict, "https://example.test/v1")
    lines = cmd.splitlines()
    assert lines[0] == "curl https://example.test/v1 \\"
    assert lines[1] == '  -H "Content-Type: application/json" \\'
    assert lines[2] == '  -H "Authorization: Bearer YOUR_API_KEY" \\'
    assert lines[3] == "  -d '{"
    assert _body(cmd) == json.dumps(sample_output_dict, indent=2)


def test_non_ascii_kept_verbatim():
    cmd = generate_curl({"task": "Écris une histoire"})
    assert "Écris" in cmd


def test_default_endpoint_ignores_cli_setting(monkeypatch, sample_output_dict):
    from storyprompt_cli import config

    monkeypatch.setenv("STORYPROMPT_ENDPOINT", "https://elsewhere.test")
    monkeypatch.setattr(config, "ENDPOINT_DEFAULT", "https://elsewhere.test")
    cmd = generate_curl(sample_output_dict)
    assert cmd.startswith("curl https://api.example.com/generate \\")
