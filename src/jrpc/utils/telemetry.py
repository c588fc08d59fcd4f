"""Tracing for codec operations.

The codec only ever talks to the OpenTelemetry *API*.  Until a tracer
provider is installed every span it opens is a no-op, so ``jrpc`` can be
used without the SDK.  Each decode call becomes one ``jrpc.decode`` span
tagged with the keys below; a failed decode also carries the JSON-RPC
error code and an ``ERROR`` status.

To export spans, install the ``otel`` extra (``pip install jrpc[otel]``)
and call :func:`configure_telemetry` once at startup.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from jrpc.errors import JsonRpcException

ATTR_MESSAGE_KIND = "jrpc.message.kind"
ATTR_METHOD = "jrpc.method"
ATTR_NOTIFICATION = "jrpc.notification"
ATTR_OUTCOME = "jrpc.outcome"
ATTR_ERROR_CODE = "jrpc.error.code"

_INSTRUMENTATION_NAME = "jrpc"
_SDK_HINT = "Install it with: pip install jrpc[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Tracer from the globally installed provider (no-op by default)."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def record_failure(span: trace.Span, exc: JsonRpcException) -> None:
    """Tag *span* with the code of a protocol failure and mark it failed."""
    span.set_attribute(ATTR_ERROR_CODE, exc.code)
    span.set_status(Status(StatusCode.ERROR, exc.message))


def build_tracer_provider(*, service_name: str = "jrpc", exporters: Iterable[Any] = ()) -> Any:
    """Create an SDK ``TracerProvider`` exporting synchronously to *exporters*.

    The provider is returned, not installed, so callers (and tests) can hold
    a private one.

    Raises:
        ImportError: If ``opentelemetry-sdk`` is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import SimpleSpanProcessor  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(f"opentelemetry-sdk is required for jrpc tracing. {_SDK_HINT}") from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for exporter in exporters:
        provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider


def configure_telemetry(
    *,
    service_name: str = "jrpc",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install a global tracer provider for codec spans.

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        Print finished spans as JSON to stdout.
    otlp_endpoint:
        Also ship spans over OTLP/gRPC to this endpoint.
    """
    exporters: list[Any] = []
    if export_to_console:
        exporters.append(_console_exporter())
    if otlp_endpoint:
        exporters.append(_otlp_exporter(otlp_endpoint))
    trace.set_tracer_provider(build_tracer_provider(service_name=service_name, exporters=exporters))


def _console_exporter() -> Any:
    try:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(f"opentelemetry-sdk is required for console export. {_SDK_HINT}") from exc
    return ConsoleSpanExporter()


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(f"opentelemetry-exporter-otlp is required for OTLP export. {_SDK_HINT}") from exc
    return OTLPSpanExporter(endpoint=endpoint)
