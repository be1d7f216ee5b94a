"""
Code Review Segmentation
========================
Splits free-form code-review reports into sections and annotates the
differences between the flagged code and the recommended fix.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

from .models import DiffKind, LineDiffEntry, ReviewSections, SectionTag
from .segmenter import (
    ReviewParser,
    ReviewSegmenter,
    clean_content_line,
    match_heading,
    normalize_heading_text,
    segment_review,
)
from .line_diff import diff_lines, summarize_line_diffs
from .analysis import ReviewAnalysis, analyze_review, coerce_review_text

__all__ = [
	"DiffKind",
	"LineDiffEntry",
	"ReviewSections",
	"SectionTag",
	"ReviewParser",
	"ReviewSegmenter",
	"clean_content_line",
	"match_heading",
	"normalize_heading_text",
	"segment_review",
	"diff_lines",
	"summarize_line_diffs",
	"ReviewAnalysis",
	"analyze_review",
	"coerce_review_text",
]
