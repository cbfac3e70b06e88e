"""Tests for the runtime used by generated Python bundles."""

import logging

import pytest

from log_bundler.runtime import FormattedMessage, format_message, get_bundle, get_logger


class TestFormatMessage:
    """Tests for format_message."""

    def test_sequential_anchors(self):
        assert format_message("Queue {} on {}", "orders", "node1").message == "Queue orders on node1"

    def test_indexed_anchors(self):
        assert format_message("{1} before {0}", "a", "b").message == "b before a"

    def test_escaped_anchor_is_literal(self):
        assert format_message("\\{} then {}", "x").message == "{} then x"

    def test_missing_arguments_leave_anchor(self):
        assert format_message("{} and {}", "a").message == "a and {}"

    def test_no_arguments(self):
        assert format_message("Plain {}").message == "Plain {}"

    def test_non_string_arguments(self):
        assert format_message("{} items", 3).message == "3 items"

    def test_unused_trailing_exception_is_throwable(self):
        error = ValueError("bad")

        result = format_message("Failed for {}", "orders", error)

        assert result == FormattedMessage("Failed for orders", ("orders", error), error)

    def test_consumed_exception_is_not_throwable(self):
        error = ValueError("bad")

        result = format_message("Failed: {}", error)

        assert result.message == "Failed: bad"
        assert result.throwable is None


class TestGetLogger:
    """Tests for the logger factory."""

    def test_returns_stdlib_logger(self):
        assert get_logger("tests.runtime") is logging.getLogger("tests.runtime")


class TestGetBundle:
    """Tests for the bundle locator."""

    def test_missing_implementation(self):
        class NeverGenerated:
            pass

        with pytest.raises(LookupError):
            get_bundle(NeverGenerated)
