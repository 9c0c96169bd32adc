import asyncio

import pyperclip

from storyprompt_cli.export.clipboard import PyperclipWriter, copy_to_clipboard


class GoodWriter:
    def __init__(self):
        self.text = None

    def write(self, text):
        self.text = text
        return True


class RefusingWriter:
    def write(self, text):
        return False


class BrokenWriter:
    def write(self, text):
        raise PermissionError("denied")


def test_success_resolves_true():
    w = GoodWriter()
    assert asyncio.run(copy_to_clipboard("hello", w)) is True
    assert w.text == "hello"


def test_writer_reporting_failure_resolves_false():
    assert asyncio.run(copy_to_clipboard("hello", RefusingWriter())) is False


def test_writer_exception_is_contained():
    assert asyncio.run(copy_to_clipboard("hello", BrokenWriter())) is False


def test_pyperclip_writer(monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    assert asyncio.run(copy_to_clipboard("hi", PyperclipWriter())) is True
    assert copied == ["hi"]


def test_pyperclip_unavailable(monkeypatch):
    def boom(text):
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(pyperclip, "copy", boom)
    assert asyncio.run(copy_to_clipboard("hi")) is False
