"""
Tests for Validation Utilities
==============================

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import io
import sys
import pytest
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils.validation import (
    is_safe_path,
    validate_path,
    decode_review_bytes,
    read_review_file,
    read_review_stream,
    safe_json_loads,
)


@pytest.mark.unit
class TestIsSafePath:
    """Tests for is_safe_path function."""

    def test_safe_path_returns_true(self):
        """Normal paths should be considered safe."""
        assert is_safe_path("/tmp/review.md") is True
        assert is_safe_path("./relative/review.md") is True
        assert is_safe_path("review.md") is True

    def test_path_traversal_returns_false(self):
        """Paths with .. should be detected as unsafe."""
        assert is_safe_path("../etc/passwd") is False
        assert is_safe_path("reviews/../../../etc/passwd") is False

    def test_system_paths_return_false(self):
        assert is_safe_path("/etc/passwd") is False

    def test_path_with_base_dir(self, tmp_path):
        """Path under base directory should be safe."""
        subdir = tmp_path / "subdir"
        subdir.mkdir()

        assert is_safe_path(subdir, base_dir=tmp_path) is True
        assert is_safe_path(Path("/usr"), base_dir=tmp_path) is False


@pytest.mark.unit
class TestValidatePath:
    """Tests for validate_path function."""

    def test_empty_path_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_path("")

    def test_nonexistent_path_raises_when_must_exist(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            validate_path(tmp_path / "nonexistent.md", must_exist=True)

    def test_file_validation(self, tmp_path):
        test_file = tmp_path / "review.md"
        test_file.write_text("content")

        assert validate_path(test_file, must_exist=True, must_be_file=True) == test_file

        with pytest.raises(ValueError, match="not a file"):
            validate_path(tmp_path, must_exist=True, must_be_file=True)


@pytest.mark.unit
class TestReadReviewFile:
    """Tests for reading review reports from disk."""

    def test_reads_utf8_text(self, review_file, full_review):
        assert read_review_file(review_file) == full_review

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_review_file(tmp_path / "missing.md")

    def test_oversized_file_raises(self, tmp_path):
        path = tmp_path / "big.md"
        path.write_text("x" * 100)
        with pytest.raises(ValueError, match="too large"):
            read_review_file(path, max_bytes=10)

    def test_zero_limit_disables_size_check(self, tmp_path):
        path = tmp_path / "big.md"
        path.write_text("x" * 100)
        assert read_review_file(path, max_bytes=0) == "x" * 100

    def test_invalid_utf8_is_replaced(self, tmp_path):
        path = tmp_path / "garbage.bin"
        path.write_bytes(b"Issues\n- \xff\xfe bad\n")
        assert read_review_file(path) == "Issues\n- \ufffd\ufffd bad\n"

    def test_bom_is_dropped(self):
        assert decode_review_bytes(b"\xef\xbb\xbfIssues") == "Issues"


@pytest.mark.unit
class TestReadReviewStream:
    """Tests for reading review reports from a binary stream."""

    def test_reads_stream_within_limit(self):
        assert read_review_stream(io.BytesIO(b"Issues\n- a"), max_bytes=11) == "Issues\n- a"

    def test_stream_over_limit_raises(self):
        stream = io.BytesIO(b"x" * 100)
        with pytest.raises(ValueError, match="too large"):
            read_review_stream(stream, max_bytes=10)
        # Reading stops just past the limit.
        assert stream.tell() == 11

    def test_zero_limit_reads_everything(self):
        assert read_review_stream(io.BytesIO(b"x" * 100), max_bytes=0) == "x" * 100

    def test_stream_bytes_are_decoded_leniently(self):
        assert read_review_stream(io.BytesIO(b"\xef\xbb\xbfa\xff")) == "a\ufffd"


@pytest.mark.unit
class TestSafeJsonLoads:
    """Tests for safe_json_loads function."""

    def test_valid_json(self):
        assert safe_json_loads('{"review": "text"}') == {"review": "text"}

    def test_invalid_json_returns_default(self):
        assert safe_json_loads("not json", default={}) == {}

    def test_empty_input_returns_default(self):
        assert safe_json_loads("", default=None) is None
        assert safe_json_loads(None, default=[]) == []

    def test_bytes_input(self):
        assert safe_json_loads(b'{"key": "value"}') == {"key": "value"}
