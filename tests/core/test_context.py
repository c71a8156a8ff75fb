# tests/core/test_context.py
"""
Testes do ReconcileContext (eventos estruturados e warnings).
"""

import logging

from venv_reconciler.core.errors import ErrorKind, state_corrupted


def test_log_appends_structured_event(ctx):
    ctx.log(step_id="install", level="INFO", message="Executando pip install", unit="/r.txt")

    event = ctx.events[-1]
    assert event["pass_id"] == "pass-test-001"
    assert event["step_id"] == "install"
    assert event["level"] == "INFO"
    assert event["unit"] == "/r.txt"
    assert "timestamp" in event


def test_log_is_forwarded_to_stdlib_logger(ctx, caplog):
    with caplog.at_level(logging.DEBUG, logger="venv_reconciler"):
        ctx.log(step_id="drift.detect", level="DEBUG", message="Classificação: in_sync")

    assert caplog.records[-1].name == "venv_reconciler"
    assert caplog.records[-1].levelno == logging.DEBUG
    assert caplog.records[-1].getMessage() == "Classificação: in_sync"


def test_add_warning_collects_payload_and_logs(ctx):
    payload = state_corrupted(path="/s", reason="invalid json")
    ctx.add_warning(step_id="state.load", payload=payload)

    assert ctx.warnings == [payload]
    assert ctx.events[-1]["kind"] == ErrorKind.STATE_CORRUPTION.value
    assert ctx.messages("WARNING") == [payload.message]


def test_messages_filters_by_level(ctx):
    ctx.log(step_id="a", level="INFO", message="um")
    ctx.log(step_id="b", level="ERROR", message="dois")

    assert ctx.messages() == ["um", "dois"]
    assert ctx.messages("ERROR") == ["dois"]
