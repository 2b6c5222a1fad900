"""Tests for error handling and logging modules."""

import json
import logging
import pytest

from lyric_sync.errors import (
    ErrorCategory,
    LyricSyncError,
    ValidationError,
    UnsupportedFormatError,
    PayloadDecodeError,
    ConfigurationError,
    ResourceError,
    format_error_for_display,
)
from lyric_sync.logging import (
    LogLevel,
    LogConfig,
    LyricSyncLogger,
    StructuredFormatter,
    configure_logging,
    get_logger,
    set_verbosity,
    enable_file_logging,
    LogContext,
)


def _record(msg="Test message", level=logging.INFO):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestErrorCategory:
    """Tests for ErrorCategory enum."""

    def test_categories(self):
        """Test error category values."""
        assert ErrorCategory.VALIDATION.value == "validation"
        assert ErrorCategory.CONFIGURATION.value == "configuration"
        assert ErrorCategory.RESOURCE.value == "resource"
        assert ErrorCategory.INTERNAL.value == "internal"


class TestLyricSyncError:
    """Tests for LyricSyncError base class."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = LyricSyncError("Test error")

        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.context == {}
        assert error.recoverable is False
        assert error.category == ErrorCategory.INTERNAL

    def test_error_with_context(self):
        """Test error with context."""
        error = LyricSyncError("Test error", context={"key": "value"})

        assert "context: {'key': 'value'}" in str(error)
        assert error.context == {"key": "value"}


class TestSpecificErrors:
    """Tests for the concrete error types."""

    def test_validation_error(self):
        error = ValidationError("Bad input")
        assert error.category == ErrorCategory.VALIDATION
        assert error.recoverable is False

    def test_unsupported_format_error(self):
        error = UnsupportedFormatError("xyz")

        assert isinstance(error, ValidationError)
        assert error.format == "xyz"
        assert error.context["format"] == "xyz"
        assert "'xyz'" in error.message

    def test_payload_decode_error_is_recoverable(self):
        error = PayloadDecodeError("Broken payload")
        assert error.recoverable is True
        assert error.category == ErrorCategory.VALIDATION

    def test_configuration_error(self):
        error = ConfigurationError("Bad settings")
        assert error.category == ErrorCategory.CONFIGURATION
        assert error.recoverable is False

    def test_resource_error(self):
        error = ResourceError("Missing file")
        assert error.category == ErrorCategory.RESOURCE


class TestFormatErrorForDisplay:
    """Tests for format_error_for_display function."""

    def test_format_lyric_sync_error(self):
        """Test formatting LyricSyncError."""
        error = ValidationError("Invalid input", context={"field": "name"})
        formatted = format_error_for_display(error)

        assert "[validation]" in formatted
        assert "Invalid input" in formatted
        assert "field=name" in formatted

    def test_format_without_context(self):
        error = ConfigurationError("Bad settings")
        assert format_error_for_display(error) == "[configuration] Bad settings"

    def test_format_generic_error(self):
        """Test formatting generic error."""
        error = ValueError("Test error")
        formatted = format_error_for_display(error)

        assert "[error]" in formatted
        assert "ValueError" in formatted


# Logging Tests

class TestLogLevel:
    """Tests for LogLevel enum."""

    def test_levels(self):
        """Test log level values."""
        assert LogLevel.QUIET == 0
        assert LogLevel.NORMAL == 1
        assert LogLevel.VERBOSE == 2
        assert LogLevel.DEBUG == 3


class TestLogConfig:
    """Tests for LogConfig."""

    def test_defaults(self):
        """Test default configuration."""
        config = LogConfig()

        assert config.level == LogLevel.NORMAL
        assert config.log_file is None
        assert config.json_format is False
        assert config.include_timestamp is True


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_text_format(self):
        """Test text formatting."""
        formatter = StructuredFormatter(
            json_format=False,
            include_timestamp=False,
            include_context=False,
            color=False,
        )

        formatted = formatter.format(_record())

        assert "INFO" in formatted
        assert "Test message" in formatted

    def test_json_format(self):
        """Test JSON formatting."""
        formatter = StructuredFormatter(
            json_format=True,
            include_timestamp=False,
            include_context=True,
        )

        parsed = json.loads(formatter.format(_record()))

        assert parsed["level"] == "info"
        assert parsed["message"] == "Test message"
        assert "timestamp" not in parsed

    def test_json_format_keeps_non_ascii(self):
        formatter = StructuredFormatter(json_format=True, include_timestamp=False)

        formatted = formatter.format(_record(msg="歌词"))

        assert "歌词" in formatted

    def test_json_context_unserializable_value(self):
        formatter = StructuredFormatter(json_format=True, include_timestamp=False)
        record = _record()
        record.payload = object()

        parsed = json.loads(formatter.format(record))

        assert isinstance(parsed["context"]["payload"], str)

    def test_context_in_text(self):
        """Test context inclusion in text format."""
        formatter = StructuredFormatter(
            json_format=False,
            include_timestamp=False,
            include_context=True,
            color=False,
        )
        record = _record()
        record.custom_key = "custom_value"

        formatted = formatter.format(record)

        assert "custom_key=custom_value" in formatted

    def test_long_logger_name_shortened(self):
        formatter = StructuredFormatter(include_timestamp=False, color=False)
        record = _record()
        record.name = "lyric_sync.lyrics.some.very.long.module"

        formatted = formatter.format(record)

        assert "..." in formatted


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_default(self):
        """Test default configuration."""
        configure_logging()

        logger = get_logger("test_configure")
        assert logger is not None

    def test_configure_verbose(self):
        """Test verbose configuration."""
        configure_logging(LogConfig(level=LogLevel.VERBOSE))

        root = logging.getLogger("lyric_sync")
        assert root.level == logging.INFO


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self):
        """Test getting a logger."""
        logger = get_logger("lyric_sync.test.module")

        assert isinstance(logger, LyricSyncLogger)
        assert logger.name == "lyric_sync.test.module"

    def test_with_context_binds_extra(self, caplog):
        logger = get_logger("lyric_sync.test.context").with_context(track="translated")

        with caplog.at_level(logging.WARNING, logger="lyric_sync"):
            logger.warning("bound context")

        assert caplog.records[-1].track == "translated"


class TestSetVerbosity:
    """Tests for set_verbosity function."""

    def test_set_verbosity(self):
        """Test setting verbosity level."""
        set_verbosity(LogLevel.DEBUG)

        root = logging.getLogger("lyric_sync")
        assert root.level == logging.DEBUG

        set_verbosity(LogLevel.NORMAL)
        assert root.level == logging.WARNING


class TestEnableFileLogging:
    """Tests for enable_file_logging function."""

    def test_enable_file_logging(self, tmp_path):
        """Test enabling file logging."""
        log_file = tmp_path / "logs" / "test.log"
        enable_file_logging(log_file)

        root = logging.getLogger("lyric_sync")
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert log_file.parent.exists()
        assert root.level == logging.DEBUG

        for handler in file_handlers:
            handler.close()
        configure_logging(LogConfig())


class TestLogContext:
    """Tests for LogContext context manager."""

    def test_log_context(self, caplog):
        """Test log context adds attributes inside the block only."""
        logger = get_logger("lyric_sync.test.log_context")

        with caplog.at_level(logging.WARNING, logger="lyric_sync"):
            with LogContext(lyrics_file="song.krc"):
                logger.warning("inside")
            logger.warning("outside")

        inside, outside = caplog.records[-2:]
        assert inside.lyrics_file == "song.krc"
        assert not hasattr(outside, "lyrics_file")
