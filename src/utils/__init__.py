"""
Utility Functions
=================
Common utilities for input validation and payload schema validation.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from .validation import (
    validate_path,
    is_safe_path,
    decode_review_bytes,
    read_review_file,
    read_review_stream,
    safe_json_loads,
)

from .schema_validation import (
    validate_against_schema,
    validate_review_sections,
    is_valid_review_sections,
    validate_line_diff_entry,
    is_valid_line_diff_entry,
)

__all__ = [
    # Validation
    "validate_path",
    "is_safe_path",
    "decode_review_bytes",
    "read_review_file",
    "read_review_stream",
    "safe_json_loads",
    # Schema validation
    "validate_against_schema",
    "validate_review_sections",
    "is_valid_review_sections",
    "validate_line_diff_entry",
    "is_valid_line_diff_entry",
]
