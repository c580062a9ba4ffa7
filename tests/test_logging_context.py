from __future__ import annotations

import logging
from typing import Any

from utils.logging_context import (
    WizardContextFilter,
    configure_logging,
    current_wizard_step,
    log_context,
    set_session_id,
    set_wizard_step,
)


def test_log_records_carry_session_and_step(caplog: Any) -> None:
    configure_logging()
    set_session_id("session-123")
    logger = logging.getLogger("test.logging.wizard")
    caplog.set_level(logging.INFO, logger=logger.name)

    with log_context(wizard_step="settings"):
        logger.info("Wizard step changed")

    record = next(record for record in caplog.records if record.message == "Wizard step changed")
    assert record.session_id == "session-123"
    assert record.wizard_step == "settings"


def test_log_context_restores_previous_step() -> None:
    set_wizard_step("basic-info")
    with log_context(wizard_step="summary"):
        assert current_wizard_step() == "summary"
    assert current_wizard_step() == "basic-info"
    set_wizard_step("  ")
    assert current_wizard_step() == "-"


def test_filter_stamps_records_built_outside_factory() -> None:
    record = logging.LogRecord("test.filter", logging.INFO, __file__, 1, "hello", None, None)
    with log_context(session_id="abc", wizard_step="summary"):
        assert WizardContextFilter().filter(record) is True
    assert record.session_id == "abc"
    assert record.wizard_step == "summary"
