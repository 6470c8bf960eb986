"""Tests for engine diagnostics logging."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
from structlog.testing import capture_logs

from special_actions.core.exceptions import ConfigurationError
from special_actions.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from special_actions.engine.dice import DiceRoller
from special_actions.engine.events import CreatureEvent, EventNotifier
from special_actions.models.creature import Creature


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo configure_logging after a test.

    Tests that configure logging must only log through loggers they
    create themselves, since configured loggers are cached on first use.
    """
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield

    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    clear_context()


class TestEngineLogging:
    """Tests for the key/value events the engine emits."""

    def test_unknown_action_warning(self, sample_creature: Creature, state: Any) -> None:
        """Test a missing action is logged as a warning with its id."""
        with capture_logs() as logs:
            sample_creature.use_action("nothing", state)

        warning = next(entry for entry in logs if entry["log_level"] == "warning")
        assert warning["event"] == "Action not found"
        assert warning["action"] == "nothing"
        assert warning["creature_id"] == "dragon"

    def test_unavailable_action_warning(self, sample_creature: Creature, state: Any) -> None:
        """Test an unaffordable action is logged with its type."""
        sample_creature.remaining_legendary_actions = 0

        with capture_logs() as logs:
            sample_creature.use_action("tail_attack", state)

        warning = next(entry for entry in logs if entry["log_level"] == "warning")
        assert warning["event"] == "Action is not available"
        assert warning["action_type"] == "legendary"

    def test_invalid_dice_warning(self) -> None:
        """Test bad notation is logged rather than raised."""
        with capture_logs() as logs:
            assert DiceRoller(seed=1).roll_total("3q7") == 0

        assert logs[-1]["event"] == "Invalid dice notation"
        assert logs[-1]["expression"] == "3q7"

    def test_listener_error_logged(self) -> None:
        """Test a raising listener is logged at error level."""
        notifier = EventNotifier()

        def broken(event: CreatureEvent, data: dict[str, Any]) -> None:
            raise RuntimeError("boom")

        notifier.add_listener(broken)

        with capture_logs() as logs:
            notifier.notify(CreatureEvent.ACTION_USED)

        assert logs[0]["event"] == "Event handler error"
        assert logs[0]["log_level"] == "error"


class TestContext:
    """Tests for context binding helpers."""

    def test_bind_and_clear(self) -> None:
        """Test context can be bound and cleared without a configured logger."""
        bind_context(encounter_id="dragon-lair", round=3)
        assert structlog.contextvars.get_contextvars() == {"encounter_id": "dragon-lair", "round": 3}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_get_logger(self) -> None:
        """Test loggers can be created by module name."""
        assert get_logger(__name__) is not None


class TestConfigureLogging:
    """Tests for the rendered output of configured logging."""

    def test_json_lines(self, restore_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON output carries the event, its keys, level, timestamp and app tag."""
        configure_logging(level="INFO", json_format=True)

        get_logger("special_actions.tests.json").info("Action used", action="tail_attack")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "Action used"
        assert record["action"] == "tail_attack"
        assert record["level"] == "info"
        assert record["app"] == "special_actions"
        assert "timestamp" in record

    def test_bound_context_in_json(
        self, restore_logging: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test bound encounter context is merged into every event."""
        configure_logging(json_format=True)
        bind_context(encounter_id="dragon-lair", round=3)

        get_logger("special_actions.tests.context").warning("Action is not available")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["encounter_id"] == "dragon-lair"
        assert record["round"] == 3
        assert record["level"] == "warning"

    def test_level_filters_events(
        self, restore_logging: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test events below the configured level are dropped."""
        configure_logging(level="WARNING", json_format=True)
        logger = get_logger("special_actions.tests.filtered")

        logger.info("Action applied")
        assert capsys.readouterr().out == ""

        logger.error("Effect raised")
        assert json.loads(capsys.readouterr().out.strip())["event"] == "Effect raised"

    def test_console_output(self, restore_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the development renderer prints the event and its keys."""
        configure_logging(level="DEBUG")

        get_logger("special_actions.tests.console").debug("Damage applied", target="kobold")

        out = capsys.readouterr().out
        assert "Damage applied" in out
        assert "kobold" in out

    def test_log_file_receives_stdlib_records(self, restore_logging: None, tmp_path: Path) -> None:
        """Test standard library records are also written to the log file."""
        log_file = tmp_path / "engine.log"
        configure_logging(level="INFO", log_file=str(log_file))

        logging.getLogger("special_actions.host").warning("Encounter saved")
        logging.getLogger("special_actions.host").debug("Too quiet to record")

        contents = log_file.read_text()
        assert "[WARNING] special_actions.host: Encounter saved" in contents
        assert "Too quiet to record" not in contents

    def test_unknown_level_rejected(self, restore_logging: None) -> None:
        """Test an unknown level name is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            configure_logging(level="LOUD")

        assert exc_info.value.details["config_key"] == "log_level"

    def test_from_settings(
        self,
        restore_logging: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
    ) -> None:
        """Test settings pick the level, the JSON renderer and the log file."""
        log_file = tmp_path / "settings.log"
        monkeypatch.setenv("SPECIAL_ACTIONS_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("SPECIAL_ACTIONS_JSON_LOGS", "true")
        monkeypatch.setenv("SPECIAL_ACTIONS_LOG_FILE", str(log_file))

        configure_logging_from_settings()
        logger = get_logger("special_actions.tests.settings")
        logger.info("Action applied")
        logger.error("Effect raised", effect_type="summon")
        logging.getLogger("special_actions.host").error("Host failure")

        lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["event"] == "Effect raised"
        assert record["effect_type"] == "summon"
        assert "Host failure" in log_file.read_text()
