"""
Unit tests for logging utilities.
"""

import logging

import pytest

from tutoraid.utils.logger import PhoneNumberFilter, mask_phone, reset_logger, setup_logger


def make_record(message, args=None):
    return logging.LogRecord("tutoraid.test", logging.INFO, __file__, 1, message, args, None)


class TestMasking:
    """Test cases for phone number masking."""

    def test_mask_phone(self):
        """Test only the last two digits stay visible."""
        assert mask_phone("91234567") == "******67"
        assert mask_phone("12") == "**"

    def test_filter_masks_long_digit_runs(self):
        """Test runs of six or more digits are masked."""
        record = make_record("Added Amy Tan (91234567), parent 98765432")

        assert PhoneNumberFilter().filter(record)
        assert record.getMessage() == "Added Amy Tan (******67), parent ******32"

    def test_filter_masks_arguments(self):
        """Test numbers passed as format arguments are masked."""
        record = make_record("Added %s (%s)", ("Amy Tan", "91234567"))

        PhoneNumberFilter().filter(record)

        assert record.getMessage() == "Added Amy Tan (******67)"

    def test_filter_keeps_short_numbers(self):
        """Test counts and capacities are left alone."""
        record = make_record("Math is full (10/10) at 1200")

        PhoneNumberFilter().filter(record)

        assert record.getMessage() == "Math is full (10/10) at 1200"


class TestSetupLogger:
    """Test cases for setup_logger."""

    @pytest.fixture
    def logger_name(self, request):
        name = f"tutoraid_test_{request.node.name}"
        yield name
        reset_logger(name)

    def test_file_output_is_masked(self, tmp_path, logger_name):
        """Test the file handler writes masked messages."""
        log_file = tmp_path / "logs" / "tutoraid.log"
        logger = setup_logger(logger_name, level=logging.DEBUG, log_file=str(log_file))

        logger.info("Saved student 91234567")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "******67" in content
        assert "91234567" not in content

    def test_no_duplicate_handlers(self, logger_name):
        """Test calling setup twice keeps one set of handlers."""
        first = setup_logger(logger_name)
        second = setup_logger(logger_name)

        assert first is second
        assert len(second.handlers) == 1

    def test_reset_logger(self, logger_name):
        """Test reset removes handlers and the level."""
        logger = setup_logger(logger_name, level=logging.ERROR)

        reset_logger(logger_name)

        assert logger.handlers == []
        assert logger.level == logging.NOTSET
