"""
OpenTelemetry Tracing Setup
===========================
Configures optional tracing for review analysis runs.

Spans are exported over OTLP/HTTP when ENABLE_TRACING=true; otherwise the
no-op tracer is used and attribute helpers do nothing.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import atexit
import json
from typing import Any, Mapping, Optional

from loguru import logger
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME

from src.config import TRACING

# Use centralized config
SERVICE_NAME_VALUE = TRACING.SERVICE_NAME
OTLP_ENDPOINT = TRACING.OTLP_ENDPOINT
ENABLE_TRACING = TRACING.ENABLED

# Track provider for cleanup
_provider: Optional[TracerProvider] = None


def _cleanup_tracing() -> None:
    """Shutdown the tracer provider to flush pending spans."""
    global _provider
    if _provider is not None:
        try:
            _provider.shutdown()
        except Exception as e:
            logger.debug(f"Tracer provider shutdown failed: {type(e).__name__}: {e}")


def setup_tracing(service_name: str = SERVICE_NAME_VALUE) -> trace.Tracer:
    """
    Initialize OpenTelemetry tracing with OTLP export.

    Args:
        service_name: Name of the service for trace identification

    Returns:
        Configured tracer instance
    """
    global _provider

    resource = Resource.create({
        SERVICE_NAME: service_name,
    })

    _provider = TracerProvider(resource=resource)

    otlp_exporter = OTLPSpanExporter(
        endpoint=OTLP_ENDPOINT,
    )

    # Add batch processor for efficient export
    _provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(_provider)

    # Register cleanup on exit to flush pending spans
    atexit.register(_cleanup_tracing)

    logger.debug(f"Tracing enabled: service={service_name} endpoint={OTLP_ENDPOINT}")
    return trace.get_tracer(service_name)


def get_tracer(name: str = SERVICE_NAME_VALUE) -> trace.Tracer:
    """
    Get a tracer instance for creating spans.
    
    Args:
        name: Tracer name (usually module or component name)
        
    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)


# Attribute size limits
MAX_STRING_ATTRIBUTE = 2048
MAX_SEQUENCE_ITEMS = 25
MAX_SEQUENCE_ITEM_STRING = 256


def _to_attribute_value(value: Any) -> Any:
    if isinstance(value, str):
        return value[:MAX_STRING_ATTRIBUTE]
    if isinstance(value, (bool, int, float)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        trimmed = list(value)[:MAX_SEQUENCE_ITEMS]
        if all(isinstance(x, (str, bool, int, float)) or x is None for x in trimmed):
            return [x[:MAX_SEQUENCE_ITEM_STRING] if isinstance(x, str) else x for x in trimmed]
        return [str(x)[:MAX_SEQUENCE_ITEM_STRING] for x in trimmed]
    if isinstance(value, dict):
        try:
            return json.dumps(value, sort_keys=True)[:MAX_STRING_ATTRIBUTE]
        except (TypeError, ValueError):
            return str(value)[:MAX_STRING_ATTRIBUTE]
    return str(value)[:MAX_STRING_ATTRIBUTE]


def safe_set_span_attributes(span: Any, attributes: Mapping[str, Any]) -> None:
    """Best-effort attribute setter.

    Safe to call with a no-op span or with values that are not directly
    serializable; nested dicts are flattened to JSON strings.
    """
    setter = getattr(span, "set_attribute", None)
    if not callable(setter):
        return

    for key, value in attributes.items():
        if not isinstance(key, str) or not key:
            continue
        try:
            setter(key, _to_attribute_value(value))
        except Exception as e:
            # Tracing must never fail an analysis run.
            logger.debug(f"Skipping span attribute {key}: {type(e).__name__}: {e}")


def safe_set_current_span_attributes(attributes: Mapping[str, Any]) -> None:
    """Set attributes on the current span when available."""
    safe_set_span_attributes(trace.get_current_span(), attributes)


_tracer: Optional[trace.Tracer] = None


def init_tracing() -> trace.Tracer:
    """
    Initialize tracing if not already done.

    Returns:
        The global tracer instance (or NoOp tracer if disabled)
    """
    global _tracer
    if _tracer is None:
        if ENABLE_TRACING:
            _tracer = setup_tracing()
        else:
            _tracer = trace.get_tracer(SERVICE_NAME_VALUE)
    return _tracer
