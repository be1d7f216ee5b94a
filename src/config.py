"""
Centralized Configuration
=========================
Centralized configuration values for the review segmentation tooling.

This module provides:
- CLI defaults (log level, input size limit, output format)
- Tracing settings

The segmenter and line differ never read configuration; only the
collaborator layer (scripts, file readers, tracing) does.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import os
from dataclasses import dataclass


OUTPUT_FORMATS = ("json", "text")


def _output_format_from_env() -> str:
    value = os.getenv("REVIEW_OUTPUT_FORMAT", "json").strip().lower()
    return value if value in OUTPUT_FORMATS else "json"


@dataclass(frozen=True)
class ReviewCliConfig:
    """Defaults for scripts/run_review_parse.py."""

    LOG_LEVEL: str = os.getenv("REVIEW_LOG_LEVEL", "WARNING").upper()

    # Reports larger than this are rejected before parsing (0 disables the check)
    MAX_INPUT_BYTES: int = int(os.getenv("REVIEW_MAX_INPUT_BYTES", str(5 * 1024 * 1024)))

    OUTPUT_FORMAT: str = _output_format_from_env()


@dataclass(frozen=True)
class TracingConfig:
    """Tracing configuration."""

    SERVICE_NAME: str = "code-review-segmenter"
    OTLP_ENDPOINT: str = os.getenv("OTLP_ENDPOINT", "http://localhost:4318/v1/traces")
    ENABLED: bool = os.getenv("ENABLE_TRACING", "false").lower() == "true"


# Global singleton instances
REVIEW_CLI = ReviewCliConfig()
TRACING = TracingConfig()
