"""
Review Segmenter
================
Lenient recovery parser that splits a free-form code-review report into
ReviewSections.

Heuristics:
- Fenced code blocks (``` or ~~~, optionally indented, optional language tag)
  are captured verbatim and attributed to the active code section, or kept
  aside as unassigned blocks
- Headings are recognised by keyword phrases on a normalized line, never by
  markdown prefix
- Bullet/paragraph lines are collected only under a list section
- Unassigned blocks fill badCode / recommendedFix by document order

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Protocol, Tuple

from loguru import logger

from src.review.models import ReviewSections, SectionTag


_LINE_ENDING_RE = re.compile(r"\r\n?")

# Heading normalization
_DECORATION_RE = re.compile(r"[`*_~>#:\-\[]")
# bullets, en/em dash, cross/check marks, light bulb, emoji variation selector
_GLYPH_RE = re.compile("[•▪◦–—❌✅✔✓✖✗\U0001f4a1️]")
_WHITESPACE_RE = re.compile(r"\s+")

# Content line cleanup
_LEADING_MARKER_RE = re.compile("^\\s*[•▪◦\\-*+\\d.]+\\s*")
_LEADING_GLYPH_RE = re.compile("^\\s*[❌✖✅✔✓✗\U0001f4a1]️?\\s*")

_FENCE_OPEN_RE = re.compile(r"^\s*(`{3,}|~{3,})(.*)$")
_FENCE_CLOSE_RE = re.compile(r"^\s*(`{3,}|~{3,})\s*$")

# Checked in order; first match wins.
_HEADING_PATTERNS: Tuple[Tuple[SectionTag, "re.Pattern[str]"], ...] = (
    (SectionTag.BAD_CODE, re.compile(r"(?:^|\s)bad code(?:\s|$)")),
    (SectionTag.ISSUES, re.compile(r"(?:^|\s)issues(?:\s|$)")),
    (
        SectionTag.RECOMMENDED_FIX,
        re.compile(r"recommended fix|correct code|fixed code|solution|refactored code"),
    ),
    (SectionTag.IMPROVEMENTS, re.compile(r"improvements?")),
    (SectionTag.SUGGESTIONS, re.compile(r"suggestions?")),
)


def normalize_heading_text(line: str) -> str:
    """Lowercase, strip markup decoration and glyphs, collapse whitespace."""
    text = line.lower()
    text = _DECORATION_RE.sub(" ", text)
    text = _GLYPH_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def match_heading(line: str) -> Optional[SectionTag]:
    """Return the section a heading line switches to, or None for content."""
    normalized = normalize_heading_text(line)
    if not normalized:
        return None
    for tag, pattern in _HEADING_PATTERNS:
        if pattern.search(normalized):
            return tag
    return None


def clean_content_line(line: str) -> str:
    """Strip a leading bullet/number marker and a leading status glyph."""
    cleaned = _LEADING_MARKER_RE.sub("", line, count=1)
    cleaned = _LEADING_GLYPH_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def _coerce_text(raw_text: Any) -> str:
    if raw_text is None:
        return ""
    if isinstance(raw_text, str):
        return raw_text
    if isinstance(raw_text, (bytes, bytearray)):
        return bytes(raw_text).decode("utf-8", errors="replace")
    return ""


def _is_closing_fence(line: str, fence: str) -> bool:
    match = _FENCE_CLOSE_RE.match(line)
    if not match:
        return False
    marker = match.group(1)
    return marker[0] == fence[0] and len(marker) >= len(fence)


def _trim_blank_edges(lines: List[str]) -> str:
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end]).rstrip()


def _read_fenced_block(lines: List[str], open_index: int, fence: str) -> Tuple[str, int]:
    """Capture the body of a fence opened at open_index.

    Returns the trimmed body and the index of the line after the closing
    fence (len(lines) when the fence is never closed).
    """
    end = open_index + 1
    while end < len(lines) and not _is_closing_fence(lines[end], fence):
        end += 1
    body = _trim_blank_edges(lines[open_index + 1:end])
    return body, min(end + 1, len(lines))


class ReviewParser(Protocol):
    """Interface for report segmenters."""

    name: str
    version: str

    def segment(self, raw_text: Any) -> ReviewSections:
        ...


class ReviewSegmenter:
    """Single-pass state machine over report lines.

    The active section is either None or a SectionTag. Each line is a fence
    (consumed atomically with its body), a heading (switches the section),
    or content (appended to the active list section, otherwise dropped).
    """

    name = "review_segmenter"
    version = "1"

    def segment(self, raw_text: Any) -> ReviewSections:
        text = _LINE_ENDING_RE.sub("\n", _coerce_text(raw_text))
        lines = text.split("\n")

        section: Optional[SectionTag] = None
        code: Dict[SectionTag, str] = {SectionTag.BAD_CODE: "", SectionTag.RECOMMENDED_FIX: ""}
        items: Dict[SectionTag, List[str]] = {
            SectionTag.ISSUES: [],
            SectionTag.IMPROVEMENTS: [],
            SectionTag.SUGGESTIONS: [],
        }
        unassigned_blocks: List[str] = []

        i = 0
        while i < len(lines):
            raw = lines[i]

            fence_match = _FENCE_OPEN_RE.match(raw)
            if fence_match:
                block, i = _read_fenced_block(lines, i, fence_match.group(1))
                if section in code:
                    code[section] = block
                else:
                    unassigned_blocks.append(block)
                continue

            heading = match_heading(raw)
            if heading is not None:
                section = heading
                i += 1
                continue

            if section in items:
                cleaned = clean_content_line(raw)
                if cleaned:
                    items[section].append(cleaned)

            i += 1

        bad_code = code[SectionTag.BAD_CODE]
        recommended_fix = code[SectionTag.RECOMMENDED_FIX]
        if not bad_code and unassigned_blocks:
            bad_code = unassigned_blocks[0]
        if not recommended_fix and len(unassigned_blocks) > 1:
            recommended_fix = unassigned_blocks[1]

        sections = ReviewSections(
            bad_code=bad_code,
            issues=tuple(items[SectionTag.ISSUES]),
            recommended_fix=recommended_fix,
            improvements=tuple(items[SectionTag.IMPROVEMENTS]),
            suggestions=tuple(items[SectionTag.SUGGESTIONS]),
        )
        logger.debug(
            f"Segmented review: lines={len(lines)} unassigned_blocks={len(unassigned_blocks)} "
            f"bad_code={bool(sections.bad_code)} recommended_fix={bool(sections.recommended_fix)} "
            f"issues={len(sections.issues)} improvements={len(sections.improvements)} "
            f"suggestions={len(sections.suggestions)}"
        )
        return sections


def segment_review(raw_text: Any) -> ReviewSections:
    """Convenience helper returning sections using the default segmenter."""
    return ReviewSegmenter().segment(raw_text)
