"""Tests for the JSONL logging bootstrap."""

import json
import logging

import pytest
from librarian import Librarian
from librarian.logging_setup import JsonlHandler
from librarian.logging_setup import init_json_logging


@pytest.fixture
def jsonl_log(tmp_path):
    root = logging.getLogger()
    previous_level = root.level
    handler = init_json_logging(tmp_path / "logs" / "librarian.jsonl", "debug")
    yield handler.path
    root.removeHandler(handler)
    handler.close()
    root.setLevel(previous_level)


def read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestJsonlLogging:
    def test_creates_parent_directory(self, jsonl_log):
        assert jsonl_log.parent.is_dir()

    def test_resolution_trace_is_written(self, jsonl_log, make_root):
        root = make_root("root", {"a.txt": "a"})
        Librarian().add_root(root).resolve("a.txt")

        records = read_lines(jsonl_log)
        messages = [r["message"] for r in records]
        assert any("[librarian:resolve] a.txt ->" in m for m in messages)
        assert all(r["schema"]["name"] == "librarian.log" for r in records)
        assert {r["lvl"] for r in records} == {"DEBUG"}

    def test_extra_fields_are_merged(self, jsonl_log):
        logging.getLogger("librarian.test").info("hello", extra={"root": "/srv/plugins"})

        record = read_lines(jsonl_log)[-1]
        assert record["message"] == "hello"
        assert record["root"] == "/srv/plugins"
        assert record["logger"] == "librarian.test"

    def test_reinit_replaces_handler(self, jsonl_log, tmp_path):
        handler = init_json_logging(tmp_path / "second.jsonl", "info")
        try:
            handlers = [h for h in logging.getLogger().handlers if isinstance(h, JsonlHandler)]
            assert handlers == [handler]
        finally:
            logging.getLogger().removeHandler(handler)
            handler.close()
