"""Tests for logging helpers."""

import subprocess
import sys

import pytest

from textlineage.observ import (
    acting_as,
    actor_id_var,
    add_context_fields,
    clear_context,
    set_actor_id,
    timer,
)


class RecordingLogger:
    """Stand-in logger collecting (level, event, fields)."""

    def __init__(self):
        self.records = []

    def debug(self, event, **fields):
        self.records.append(("debug", event, fields))

    def error(self, event, **fields):
        self.records.append(("error", event, fields))


class TestContextFields:
    """Test context variable injection."""

    def teardown_method(self):
        clear_context()

    def test_actor_added_when_set(self):
        set_actor_id("u1")
        event = add_context_fields(None, "info", {"event": "translation_added"})
        assert event["actor_id"] == "u1"

    def test_nothing_added_when_clear(self):
        clear_context()
        event = add_context_fields(None, "info", {"event": "translation_added"})
        assert "actor_id" not in event


class TestTimer:
    """Test block timing."""

    def test_logs_start_and_completion(self):
        logger = RecordingLogger()
        with timer(logger, "cascade_removal", culture="fr") as t:
            pass

        assert [r[1] for r in logger.records] == [
            "cascade_removal_started",
            "cascade_removal_completed",
        ]
        assert logger.records[1][2]["culture"] == "fr"
        assert t.duration_ms >= 0

    def test_logs_failure_and_reraises(self):
        logger = RecordingLogger()
        with pytest.raises(RuntimeError):
            with timer(logger, "obsolescence_propagation"):
                raise RuntimeError("boom")

        level, event, fields = logger.records[-1]
        assert level == "error"
        assert event == "obsolescence_propagation_failed"
        assert fields["error_type"] == "RuntimeError"
        assert fields["success"] is False


class TestActingAs:
    """Test scoped actor attribution."""

    def teardown_method(self):
        clear_context()

    def test_sets_and_restores_actor(self):
        set_actor_id("editor")
        with acting_as("u1"):
            event = add_context_fields(None, "info", {"event": "translation_added"})
            assert event["actor_id"] == "u1"
        assert actor_id_var.get() == "editor"

    def test_restores_on_error(self):
        with pytest.raises(ValueError):
            with acting_as("u1"):
                raise ValueError("bad edit")
        assert actor_id_var.get() is None


class TestImportSideEffects:
    """Test that importing the package leaves process logging alone."""

    def test_import_does_not_configure_structlog(self):
        result = subprocess.run(
            [
                sys.executable,
                "-c",
                "import logging, structlog, textlineage; "
                "print(structlog.is_configured(), len(logging.getLogger().handlers))",
            ],
            capture_output=True,
            text=True,
            check=True,
        )
        assert result.stdout.split() == ["False", "0"]
