"""Shared test fixtures for logctx tests."""

import io

import pytest

from logctx import ContextHandler, HandlerOptions, JSONHandler, Logger, TextHandler
from logctx.telemetry import config


def remove_time(groups, a):
    """replace_attr hook that drops the top-level time field."""
    if a.key == "time" and len(groups) == 0:
        return None
    return a


@pytest.fixture
def out():
    """In-memory stream for handler output."""
    return io.StringIO()


@pytest.fixture
def text_logger(out):
    """Logger writing time-less text lines to ``out``, without the context decorator."""
    return Logger(TextHandler(out, HandlerOptions(replace_attr=remove_time)))


@pytest.fixture
def json_logger(out):
    """Logger writing time-less JSON lines to ``out`` through a ContextHandler."""
    return Logger(ContextHandler(JSONHandler(out, HandlerOptions(replace_attr=remove_time))))


@pytest.fixture
def fresh_root(monkeypatch):
    """Forget the memoized root logger for the duration of a test."""
    monkeypatch.setattr(config, "_root", None)
    monkeypatch.delenv(config.ENV_KEY, raising=False)
    return config
