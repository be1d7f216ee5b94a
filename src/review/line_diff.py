"""
Line Differ
===========
Positional line differ for original vs. recommended code.

Lines are compared strictly by index after trimming. There is no alignment
search, so an inserted or deleted line shifts every later position and shows
up as a run of change entries.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from src.review.models import DiffKind, LineDiffEntry


_LINE_ENDING_RE = re.compile(r"\r\n?")


def _split_lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return _LINE_ENDING_RE.sub("\n", text).split("\n")


def diff_lines(before: Optional[str], after: Optional[str]) -> List[LineDiffEntry]:
    """Compare two code blocks line by line.

    Returns an empty list when either side is empty.
    """
    a_lines = _split_lines(before)
    b_lines = _split_lines(after)
    if not a_lines or not b_lines:
        return []

    entries: List[LineDiffEntry] = []
    for i in range(max(len(a_lines), len(b_lines))):
        a = a_lines[i].strip() if i < len(a_lines) else ""
        b = b_lines[i].strip() if i < len(b_lines) else ""
        if a == b:
            continue
        if a and not b:
            entries.append(LineDiffEntry(kind=DiffKind.REMOVE, line=i + 1, bad_text=a))
        elif b and not a:
            entries.append(LineDiffEntry(kind=DiffKind.ADD, line=i + 1, fix_text=b))
        else:
            entries.append(LineDiffEntry(kind=DiffKind.CHANGE, line=i + 1, bad_text=a, fix_text=b))
    return entries


def summarize_line_diffs(entries: Iterable[LineDiffEntry]) -> Dict[str, int]:
    """Count entries per kind; every kind is present, zero if unused."""
    counts: Dict[str, int] = {kind.value: 0 for kind in DiffKind}
    for entry in entries:
        counts[entry.kind.value] += 1
    return counts
