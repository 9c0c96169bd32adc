import json

from storyprompt_cli.export.download import LocalFileSaver, download_json


class RecordingSaver:
    def __init__(self, ok=True):
        self.ok = ok
        self.calls = []

    def save(self, data, filename):
        self.calls.append((data, filename))
        return self.ok


def test_default_filename_and_payload(sample_output_dict):
    saver = RecordingSaver()
    assert download_json(sample_output_dict, saver=saver) is True
    data, name = saver.calls[0]
    assert name == "prompt.json"
    assert data == json.dumps(sample_output_dict, indent=2).encode("utf-8")


def test_saver_failure_is_reported_not_raised(sample_output_dict):
    assert download_json(sample_output_dict, "x.json", RecordingSaver(ok=False)) is False


def test_local_saver_writes_file(tmp_path, sample_output_dict):
    saver = LocalFileSaver(tmp_path / "out")
    assert download_json(sample_output_dict, "story.json", saver)
    written = (tmp_path / "out" / "story.json").read_text(encoding="utf-8")
    assert json.loads(written) == sample_output_dict


def test_local_saver_returns_false_on_os_error(tmp_path, sample_output_dict):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    assert download_json(sample_output_dict, saver=LocalFileSaver(blocker)) is False


class RaisingSaver:
    def save(self, data, filename):
        raise PermissionError("denied")


def test_raising_saver_returns_false(sample_output_dict):
    assert download_json(sample_output_dict, saver=RaisingSaver()) is False


def test_local_saver_rejects_nul_in_filename(tmp_path, sample_output_dict):
    assert download_json(sample_output_dict, "bad\x00.json", LocalFileSaver(tmp_path)) is False
    assert list(tmp_path.iterdir()) == []
