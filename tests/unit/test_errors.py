"""Tests for the CRDT error taxonomy."""

import pytest

from convergent.errors import CRDTError, InvalidArgumentError, InvalidLengthError


class TestErrorTaxonomy:
    """Tests for error classes."""

    @pytest.mark.parametrize("cls", [InvalidArgumentError, InvalidLengthError])
    def test_subclasses_crdt_error(self, cls):
        assert issubclass(cls, CRDTError)
        assert issubclass(cls, ValueError)

    def test_kinds_are_distinct(self):
        assert not issubclass(InvalidArgumentError, InvalidLengthError)
        assert not issubclass(InvalidLengthError, InvalidArgumentError)

    def test_str_is_message(self):
        error = InvalidArgumentError("argument should be an integer")
        assert str(error) == "argument should be an integer"
        assert error.message == "argument should be an integer"

    def test_catchable_as_value_error(self):
        with pytest.raises(ValueError, match="do not match"):
            raise InvalidLengthError("length of two counters do not match")
