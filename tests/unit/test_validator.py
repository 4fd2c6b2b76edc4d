"""Tests for the overwrite conflict validator."""

import pytest

from kubelabel.core.errors import OverwriteConflictError
from kubelabel.core.validator import validate_no_overwrites


class TestValidateNoOverwrites:
    """Tests for validate_no_overwrites."""

    def test_one_shared_key_differs(self):
        """Test that a differing shared key is a conflict."""
        with pytest.raises(OverwriteConflictError) as exc_info:
            validate_no_overwrites({"a": "b", "c": "d"}, {"a": "c", "d": "b"})

        err = exc_info.value
        assert (err.key, err.old_value, err.new_value) == ("a", "b", "c")
        assert "--overwrite" in str(err)

    def test_second_shared_key_differs(self):
        """Test a conflict on a key other than the first one checked."""
        with pytest.raises(OverwriteConflictError) as exc_info:
            validate_no_overwrites({"a": "b", "c": "d"}, {"b": "d", "c": "a"})

        assert exc_info.value.key == "c"

    def test_no_overlap(self):
        """Test that disjoint keys never conflict."""
        validate_no_overwrites({"a": "b", "c": "d"}, {"b": "a", "d": "c"})

    def test_no_existing_labels(self):
        """Test that empty or absent current labels never conflict."""
        validate_no_overwrites({}, {"b": "a", "d": "c"})
        validate_no_overwrites(None, {"b": "a", "d": "c"})

    def test_identical_value_is_not_a_conflict(self):
        """Test that re-setting a label to its current value is allowed."""
        validate_no_overwrites({"a": "b"}, {"a": "b"})

    def test_empty_additions(self):
        validate_no_overwrites({"a": "b"}, {})
