"""
Review Section Models
=====================
Immutable records produced by the review segmenter and the line differ.

- ReviewSections: the five logical sections of a code-review report
- LineDiffEntry: one positional line annotation between two code blocks

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from src.utils.schema_validation import validate_line_diff_entry, validate_review_sections


class SectionTag(str, Enum):
    """Section a content line or fenced block is attributed to."""

    BAD_CODE = "badCode"
    ISSUES = "issues"
    RECOMMENDED_FIX = "recommendedFix"
    IMPROVEMENTS = "improvements"
    SUGGESTIONS = "suggestions"


@dataclass(frozen=True)
class ReviewSections:
    """Structured view of a review report. Every field is always present."""

    bad_code: str = ""
    issues: Tuple[str, ...] = ()
    recommended_fix: str = ""
    improvements: Tuple[str, ...] = ()
    suggestions: Tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "ReviewSections":
        return cls()

    def is_empty(self) -> bool:
        return not (self.bad_code or self.issues or self.recommended_fix or self.improvements or self.suggestions)

    def has_code_pair(self) -> bool:
        return bool(self.bad_code) and bool(self.recommended_fix)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "badCode": self.bad_code,
            "issues": list(self.issues),
            "recommendedFix": self.recommended_fix,
            "improvements": list(self.improvements),
            "suggestions": list(self.suggestions),
        }
        validate_review_sections(payload)
        return payload


class DiffKind(str, Enum):
    CHANGE = "change"
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class LineDiffEntry:
    """Line-level annotation at a 1-based position.

    `bad_text` is set for change/remove, `fix_text` for change/add.
    """

    kind: DiffKind
    line: int
    bad_text: Optional[str] = None
    fix_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"kind": self.kind.value, "line": self.line}
        if self.bad_text is not None:
            payload["badText"] = self.bad_text
        if self.fix_text is not None:
            payload["fixText"] = self.fix_text
        validate_line_diff_entry(payload)
        return payload

    def describe(self) -> str:
        if self.kind == DiffKind.CHANGE:
            return f"Line {self.line}: replace {self.bad_text!r} with {self.fix_text!r}"
        if self.kind == DiffKind.ADD:
            return f"Line {self.line}: insert {self.fix_text!r}"
        return f"Line {self.line}: remove {self.bad_text!r}"
