"""Tests for root logger configuration.

- build_logger() parsing of type/output/level/addSource
- root_logger() one-time initialization, including failures
- get_logger() naming
"""

import json
import os
import threading

import pytest

from logctx import (
    DEBUG,
    INFO,
    WARN,
    Context,
    ContextHandler,
    DiscardHandler,
    JSONHandler,
    LoggerConfigError,
    StdlibHandler,
    TextHandler,
    build_logger,
    get_logger,
    root_logger,
    with_attrs,
)


class TestBuildLogger:
    """Tests for build_logger()."""

    @pytest.mark.parametrize(
        "config, inner",
        [
            ("json", JSONHandler),
            ("", JSONHandler),
            ("?level=debug", JSONHandler),
            ("text", TextHandler),
            ("default", StdlibHandler),
        ],
    )
    def test_types_wrapped_in_context_handler(self, config, inner):
        logger = build_logger(config)
        assert isinstance(logger.handler, ContextHandler)
        assert isinstance(logger.handler.next, inner)

    def test_discard_not_wrapped(self):
        logger = build_logger("discard")
        assert isinstance(logger.handler, DiscardHandler)
        assert logger.enabled(100) is False

    def test_unknown_type(self):
        with pytest.raises(LoggerConfigError) as exc_info:
            build_logger("xml?level=info")
        assert str(exc_info.value) == "unknown logger=`xml`"
        assert exc_info.value.field == "type"

    def test_stdout_text(self, capsys):
        logger = build_logger("text?output=stdout&level=debug")
        logger.debug("hello", ctx=with_attrs(Context.background(), "user", "alice"))

        line = capsys.readouterr().out
        assert " level=DEBUG msg=hello user=alice\n" in line

    def test_stderr_default_output(self, capsys):
        build_logger("json?level=info").info("m")
        data = json.loads(capsys.readouterr().err)
        assert data["msg"] == "m"
        assert "source" not in data

    def test_discard_output(self, capsys):
        logger = build_logger("text?output=discard")
        logger.info("m")
        captured = capsys.readouterr()
        assert captured.out == "" and captured.err == ""
        assert logger.enabled(INFO)

    def test_file_descriptor_output(self):
        r, w = os.pipe()
        try:
            build_logger(f"json?output={w}&addSource=true").warn("piped")
            data = json.loads(os.read(r, 65536).decode())
        finally:
            os.close(r)
            os.close(w)
        assert data["msg"] == "piped"
        assert data["level"] == "WARN"
        assert data["source"]["function"] == "test_file_descriptor_output"

    @pytest.mark.parametrize("value", ["bogus", "3x", "/dev/null"])
    def test_unknown_output(self, value):
        with pytest.raises(LoggerConfigError) as exc_info:
            build_logger(f"text?output={value}")
        assert str(exc_info.value) == (
            f"unknown output=`{value}`, must be a file descriptor or one of "
            "`stdout`, `stderr` or `discard`"
        )

    def test_bad_file_descriptor(self):
        with pytest.raises(LoggerConfigError) as exc_info:
            build_logger("text?output=-1")
        assert exc_info.value.field == "output"

    @pytest.mark.parametrize(
        "value, level",
        [("debug", DEBUG), ("WARN", WARN), ("error-8", INFO), ("info+2", 2), ("info%2B2", 2), ("-2", -2)],
    )
    def test_level(self, value, level):
        logger = build_logger(f"text?output=discard&level={value}")
        assert logger.enabled(level)
        assert not logger.enabled(level - 1)

    def test_invalid_level(self):
        with pytest.raises(LoggerConfigError) as exc_info:
            build_logger("json?level=loud")
        assert str(exc_info.value) == "invalid level=`loud`, e.g. `debug`, `warn`, `info` or `error`"

    @pytest.mark.parametrize("value", ["1", "t", "TRUE", "True", "0", "f", "false"])
    def test_add_source_literals(self, value):
        build_logger(f"json?output=discard&addSource={value}")

    def test_invalid_add_source(self):
        with pytest.raises(LoggerConfigError) as exc_info:
            build_logger("json?addSource=yes")
        assert str(exc_info.value) == "invalid addSource=`yes`, must be parsed as a boolean"
        assert exc_info.value.value == "yes"


class TestRootLogger:
    """Tests for the memoized root logger."""

    def test_singleton(self, fresh_root, monkeypatch):
        monkeypatch.setenv(fresh_root.ENV_KEY, "text?output=discard")
        first = root_logger()

        monkeypatch.setenv(fresh_root.ENV_KEY, "json?output=stdout")
        assert root_logger() is first
        assert isinstance(first.handler.next, TextHandler)

    def test_default_when_unset(self, fresh_root):
        logger = root_logger()
        assert isinstance(logger.handler.next, JSONHandler)
        assert not logger.enabled(WARN)

    def test_empty_env_uses_default(self, fresh_root, monkeypatch):
        monkeypatch.setenv(fresh_root.ENV_KEY, "")
        assert isinstance(root_logger().handler.next, JSONHandler)

    def test_failure_is_memoized(self, fresh_root, monkeypatch):
        monkeypatch.setenv(fresh_root.ENV_KEY, "bogus")
        with pytest.raises(LoggerConfigError) as first:
            root_logger()

        monkeypatch.setenv(fresh_root.ENV_KEY, "text")
        with pytest.raises(LoggerConfigError) as second:
            root_logger()
        assert second.value is first.value

    def test_built_once_under_concurrency(self, fresh_root, monkeypatch):
        calls = []
        real_build = fresh_root.build_logger

        def counting_build(config):
            calls.append(config)
            return real_build("discard")

        monkeypatch.setattr(fresh_root, "build_logger", counting_build)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(root_logger())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert all(r is results[0] for r in results)


class TestGetLogger:
    """Tests for get_logger()."""

    def test_named(self, fresh_root, monkeypatch, capsys):
        monkeypatch.setenv(fresh_root.ENV_KEY, "json?output=stdout")
        get_logger("example").info("guide", "the meaning of life", 42)

        data = json.loads(capsys.readouterr().out)
        assert data["logger"] == "example"
        assert data["the meaning of life"] == 42

    def test_defaults_to_caller_module(self, fresh_root, monkeypatch, capsys):
        monkeypatch.setenv(fresh_root.ENV_KEY, "json?output=stdout")
        get_logger().info("m")

        data = json.loads(capsys.readouterr().out)
        assert data["logger"] == __name__

    def test_empty_name_is_root(self, fresh_root, monkeypatch):
        monkeypatch.setenv(fresh_root.ENV_KEY, "text?output=discard")
        assert get_logger("") is root_logger()

    def test_config_error_raised(self, fresh_root, monkeypatch):
        monkeypatch.setenv(fresh_root.ENV_KEY, "json?output=nowhere")
        with pytest.raises(LoggerConfigError):
            get_logger("x")
