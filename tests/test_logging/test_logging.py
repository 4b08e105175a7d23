"""Tests for structured logging."""

import io
import json
import logging
import sys

import pytest

from entitygen.logging import (
    ContextFilter,
    JSONFormatter,
    LogContext,
    LogFormat,
    LogLevel,
    TextFormatter,
    clear_log_context,
    configure_logging,
    get_log_context,
    get_logger,
    set_log_context,
    with_log_context,
)


def make_record(msg: str = "Wrote artifact", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="entitygen.codegen",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def clean_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_logger():
    logger = logging.getLogger("entitygen")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestLogContext:
    def test_to_dict_skips_unset(self):
        context = LogContext(entity="user", extra={"attempt": 1})

        assert context.to_dict() == {"entity": "user", "attempt": 1}

    def test_set_and_clear(self):
        set_log_context(LogContext(run_id="r1"))
        assert get_log_context() == {"run_id": "r1"}

        clear_log_context()
        assert get_log_context() == {}

    def test_nested_scopes_merge(self):
        with with_log_context(run_id="r1"):
            with with_log_context({"entity": "user"}, artifact="data"):
                assert get_log_context() == {
                    "run_id": "r1",
                    "entity": "user",
                    "artifact": "data",
                }
            assert get_log_context() == {"run_id": "r1"}
        assert get_log_context() == {}

    def test_scope_restored_on_error(self):
        with pytest.raises(RuntimeError):
            with with_log_context(entity="user"):
                raise RuntimeError("boom")

        assert get_log_context() == {}

    def test_filter_injects_fields(self):
        record = make_record(entity="explicit")

        with with_log_context(run_id="r1", entity="user"):
            assert ContextFilter().filter(record)

        assert record.run_id == "r1"
        assert record.entity == "explicit"


class TestJSONFormatter:
    def test_fields(self):
        record = make_record(run_id="r1", entity="user", duration_ms=1.5, path="a/IUser.py")

        payload = json.loads(JSONFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "entitygen.codegen"
        assert payload["message"] == "Wrote artifact"
        assert payload["run_id"] == "r1"
        assert payload["entity"] == "user"
        assert "artifact" not in payload
        assert payload["duration_ms"] == 1.5
        assert payload["extra"] == {"path": "a/IUser.py"}

    def test_without_extra(self):
        record = make_record(path="a/IUser.py")

        payload = json.loads(JSONFormatter(include_extra=False).format(record))

        assert "extra" not in payload

    def test_unserializable_extra(self):
        record = make_record(target=object)

        payload = json.loads(JSONFormatter().format(record))

        assert payload["extra"]["target"] == str(object)

    def test_exception(self):
        try:
            raise ValueError("bad entity")
        except ValueError:
            record = logging.LogRecord(
                "entitygen", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        payload = json.loads(JSONFormatter().format(record))

        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "bad entity"


class TestTextFormatter:
    def test_line(self):
        record = make_record(entity="user", artifact="data", duration_ms=0.44)

        line = TextFormatter(use_colors=False).format(record)

        assert line.endswith(
            "INFO     entitygen.codegen [entity=user, artifact=data]: Wrote artifact (0.4ms)"
        )

    def test_colors(self):
        line = TextFormatter(use_colors=True).format(make_record())

        assert "\033[32m" in line


class TestConfigureLogging:
    def test_json_output(self, restore_logger):
        output = io.StringIO()
        configure_logging(level="debug", format="json", output=output)

        with with_log_context(run_id="r1"):
            get_logger("entitygen.codegen").debug("Rendering", artifact="contract")

        payload = json.loads(output.getvalue())
        assert payload["message"] == "Rendering"
        assert payload["run_id"] == "r1"
        assert payload["artifact"] == "contract"
        assert restore_logger.propagate is False

    def test_text_output(self, restore_logger):
        output = io.StringIO()
        configure_logging(level=LogLevel.INFO, format=LogFormat.TEXT, output=output, use_colors=False)

        logger = get_logger("entitygen.codegen")
        logger.debug("hidden")
        logger.info("shown", entity="user")

        text = output.getvalue()
        assert "hidden" not in text
        assert "[entity=user]: shown" in text

    def test_reconfigure_replaces_handler(self, restore_logger):
        configure_logging(output=io.StringIO())
        configure_logging(output=io.StringIO())

        assert len(restore_logger.handlers) == 1

    def test_is_enabled_for(self, restore_logger):
        configure_logging(level="WARNING", output=io.StringIO())
        logger = get_logger("entitygen.codegen")

        assert logger.is_enabled_for(LogLevel.ERROR)
        assert not logger.is_enabled_for(logging.INFO)
        assert logger.name == "entitygen.codegen"

    def test_invalid_level(self, restore_logger):
        with pytest.raises(ValueError):
            configure_logging(level="loud")
