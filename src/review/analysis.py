"""
Review Analysis
===============
Combines segmentation and the line differ into one result for callers that
display a review, plus glue for turning upstream response payloads into
report text.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from src.review.line_diff import diff_lines, summarize_line_diffs
from src.review.models import LineDiffEntry, ReviewSections
from src.review.segmenter import segment_review
from src.utils.validation import safe_json_loads


# Field names checked, in order, when an upstream payload is a JSON object.
REVIEW_TEXT_FIELDS = ("review", "text", "content")


@dataclass(frozen=True)
class ReviewAnalysis:
    sections: ReviewSections = field(default_factory=ReviewSections.empty)
    line_diffs: Tuple[LineDiffEntry, ...] = ()

    def summary(self) -> Dict[str, Any]:
        return {
            "has_bad_code": bool(self.sections.bad_code),
            "has_recommended_fix": bool(self.sections.recommended_fix),
            "issues": len(self.sections.issues),
            "improvements": len(self.sections.improvements),
            "suggestions": len(self.sections.suggestions),
            "line_diffs": summarize_line_diffs(self.line_diffs),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sections": self.sections.to_dict(),
            "lineDiffs": [entry.to_dict() for entry in self.line_diffs],
            "summary": self.summary(),
        }

    def render_text(self) -> str:
        """Plain-text report in display order; empty sections are skipped."""
        s = self.sections
        out: List[str] = []

        def block(title: str, body: List[str]) -> None:
            if out:
                out.append("")
            out.append(title)
            out.extend(body)

        if s.bad_code:
            block("Bad Code:", s.bad_code.split("\n"))
        if s.issues:
            block("Issues:", [f"- {item}" for item in s.issues])
        if s.recommended_fix:
            block("Correct Code:", s.recommended_fix.split("\n"))
        if self.line_diffs:
            block("Line-by-line suggestions:", [f"- {entry.describe()}" for entry in self.line_diffs])
        if s.improvements:
            block("Improvements:", [f"- {item}" for item in s.improvements])
        if s.suggestions:
            block("Suggestions:", [f"- {item}" for item in s.suggestions])

        if not out:
            return "No review sections found.\n"
        return "\n".join(out) + "\n"


def coerce_review_text(payload: Any) -> str:
    """Best-effort conversion of an upstream response body into report text.

    A missing or failed response is treated as an empty report. A string
    that is a JSON object without a review text field is kept as-is.
    """
    if payload is None:
        return ""
    if isinstance(payload, (bytes, bytearray)):
        payload = bytes(payload).decode("utf-8", errors="replace")
    if isinstance(payload, str):
        stripped = payload.strip()
        if stripped.startswith("{"):
            parsed = safe_json_loads(stripped, default=None, log_errors=False)
            if isinstance(parsed, dict):
                text = _text_from_mapping(parsed)
                if text is not None:
                    return text
        return payload
    if isinstance(payload, dict):
        text = _text_from_mapping(payload)
        return "" if text is None else text
    logger.debug(f"Unsupported review payload type: {type(payload).__name__}")
    return ""


def _text_from_mapping(payload: Dict[str, Any]) -> Optional[str]:
    for key in REVIEW_TEXT_FIELDS:
        value = payload.get(key)
        if isinstance(value, str):
            return value
    logger.debug(f"Review payload has none of the fields {REVIEW_TEXT_FIELDS}")
    return None


def analyze_review(raw_text: Any) -> ReviewAnalysis:
    """Segment a report and diff its code pair when both blocks are present."""
    sections = segment_review(raw_text)
    if not sections.has_code_pair():
        return ReviewAnalysis(sections=sections)
    diffs = diff_lines(sections.bad_code, sections.recommended_fix)
    return ReviewAnalysis(sections=sections, line_diffs=tuple(diffs))
