from __future__ import annotations

import logging

import pytest

from snippetsmith.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    format_event_message,
)
from snippetsmith.ui.cli.diagnostics import CliEmitter
from snippetsmith.ui.cli.state import CLIState


def test_emitters_satisfy_protocol() -> None:
    assert isinstance(NullEmitter(), DiagnosticEmitter)
    assert isinstance(LoggingEmitter(), DiagnosticEmitter)


def test_closed_snippets_have_no_summary() -> None:
    assert format_event_message("playground_snippet", {"lines": (0, 3), "closed": True}) is None


def test_unclosed_snippet_message_uses_one_based_lines() -> None:
    message = format_event_message("playground_snippet", {"lines": (4, 9), "closed": False})

    assert message == (
        "Playground snippet at lines 5-9 has no closing fence; closed at block end"
    )


def test_export_message_and_unknown_events() -> None:
    assert format_event_message("snippet_export", {"path": "out/a/main.go"}) == (
        "Wrote snippet: out/a/main.go"
    )
    assert format_event_message("something_else", {}) is None


def test_logging_emitter_routes_messages(caplog: pytest.LogCaptureFixture) -> None:
    target = logging.getLogger("tests.snippetsmith.diagnostics")
    emitter = LoggingEmitter(logger_obj=target)

    with caplog.at_level(logging.DEBUG, logger=target.name):
        emitter.warning("careful")
        emitter.error("broken", exc=ValueError("bad"))
        emitter.event("snippet_export", {"path": "x/main.go"})
        emitter.event("playground_snippet", {"lines": (0, 3), "closed": True})

    records = [(record.levelno, record.getMessage()) for record in caplog.records]
    assert (logging.WARNING, "careful") in records
    assert (logging.ERROR, "broken") in records
    assert (logging.INFO, "Wrote snippet: x/main.go") in records
    assert any(
        level == logging.DEBUG and message.startswith("diagnostic event playground_snippet")
        for level, message in records
    )


def test_cli_emitter_records_events() -> None:
    state = CLIState()
    emitter = CliEmitter(state)

    emitter.event("playground_snippet", {"lines": (0, 3), "closed": True})
    emitter.event("playground_snippet", {"lines": (4, 6), "closed": False})

    events = state.consume_events("playground_snippet")
    assert [event["lines"] for event in events] == [(0, 3), (4, 6)]
    assert state.consume_events("playground_snippet") == []
    assert emitter.debug_enabled is False
