"""Unit tests for bmap.exceptions module."""

import pytest

from bmap.exceptions import (
    BMapException,
    IllegalStateException,
    IllegalArgumentException,
    ConfigurationException,
    BMapSerializationException,
)


class TestBMapException:
    """Tests for BMapException base class."""

    def test_create_with_message(self):
        ex = BMapException("test message")
        assert str(ex) == "test message"
        assert ex.cause is None

    def test_create_with_message_and_cause(self):
        cause = ValueError("original error")
        ex = BMapException("wrapper message", cause=cause)
        assert str(ex) == "wrapper message"
        assert ex.cause is cause

    def test_create_empty(self):
        ex = BMapException()
        assert str(ex) == ""
        assert ex.cause is None

    def test_inheritance(self):
        assert isinstance(BMapException("test"), Exception)


@pytest.mark.parametrize(
    "exception_class",
    [
        IllegalStateException,
        IllegalArgumentException,
        ConfigurationException,
        BMapSerializationException,
    ],
)
class TestSubclasses:
    def test_inheritance(self, exception_class):
        ex = exception_class("problem")
        assert isinstance(ex, BMapException)
        assert str(ex) == "problem"

    def test_catchable_as_base(self, exception_class):
        with pytest.raises(BMapException):
            raise exception_class("problem")
