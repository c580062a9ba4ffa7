"""OpenTelemetry tracing for the wizard's outbound calls.

Tracing is opt-in: without ``OTEL_EXPORTER_OTLP_ENDPOINT`` the global no-op
provider stays in place and :func:`traced_span` costs next to nothing.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Mapping

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import (
    ALWAYS_OFF,
    ALWAYS_ON,
    ParentBased,
    Sampler,
    TraceIdRatioBased,
)
from opentelemetry.trace import Span, Status, StatusCode

LOGGER = logging.getLogger("room_wizard.telemetry")

TRACER_NAME = "room_wizard"
DEFAULT_SERVICE_NAME = "room-wizard"

_INITIALISED = False

_SAMPLERS: Mapping[str, Callable[[float], Sampler]] = {
    "parentbased_traceidratio": lambda ratio: ParentBased(TraceIdRatioBased(ratio)),
    "traceidratio": TraceIdRatioBased,
    "always_on": lambda _ratio: ALWAYS_ON,
    "always_off": lambda _ratio: ALWAYS_OFF,
}


@dataclass(frozen=True)
class OtlpConfig:
    """Settings for the OTLP/HTTP span exporter."""

    endpoint: str
    headers: Mapping[str, str] | None = None
    timeout: int | None = None
    certificate_file: str | None = None

    @classmethod
    def from_env(cls) -> "OtlpConfig | None":
        """Read ``OTEL_EXPORTER_OTLP_*``; return ``None`` without an endpoint."""

        endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "").strip()
        if not endpoint:
            return None
        timeout: int | None = None
        timeout_raw = os.getenv("OTEL_EXPORTER_OTLP_TIMEOUT", "").strip()
        if timeout_raw:
            try:
                timeout = int(float(timeout_raw))
            except ValueError:
                LOGGER.warning("Ignoring invalid OTEL_EXPORTER_OTLP_TIMEOUT '%s'", timeout_raw)
        return cls(
            endpoint=endpoint,
            headers=parse_headers(os.getenv("OTEL_EXPORTER_OTLP_HEADERS")) or None,
            timeout=timeout,
            certificate_file=os.getenv("OTEL_EXPORTER_OTLP_CERTIFICATE", "").strip() or None,
        )


def parse_headers(raw: str | None) -> dict[str, str]:
    """Parse ``key=value,key2=value2`` into a dictionary, skipping junk."""

    pairs = (fragment.split("=", 1) for fragment in (raw or "").split(",") if "=" in fragment)
    return {key.strip(): value.strip() for key, value in pairs if key.strip()}


def build_sampler(name: str | None = None, arg: str | None = None) -> Sampler:
    """Return the sampler named by ``OTEL_TRACES_SAMPLER`` (parent-based ratio by default)."""

    name = (name if name is not None else os.getenv("OTEL_TRACES_SAMPLER", "")).strip().lower()
    arg = (arg if arg is not None else os.getenv("OTEL_TRACES_SAMPLER_ARG", "")).strip()
    ratio = 1.0
    if arg:
        try:
            ratio = max(0.0, min(1.0, float(arg)))
        except ValueError:
            LOGGER.warning("Invalid OTEL_TRACES_SAMPLER_ARG '%s'; sampling everything", arg)
    factory = _SAMPLERS.get(name or "parentbased_traceidratio")
    if factory is None:
        LOGGER.warning("Unknown OTEL_TRACES_SAMPLER '%s'; using parentbased_traceidratio", name)
        factory = _SAMPLERS["parentbased_traceidratio"]
    return factory(ratio)


def setup_tracing(*, force: bool = False) -> bool:
    """Install an SDK tracer provider when an OTLP endpoint is configured.

    Returns ``True`` when a provider was installed by this call.
    """

    global _INITIALISED
    if _INITIALISED and not force:
        return False
    if os.getenv("OTEL_TRACES_ENABLED", "1").strip().lower() in {"0", "false", "off"}:
        LOGGER.info("Telemetry disabled via OTEL_TRACES_ENABLED")
        return False
    config = OtlpConfig.from_env()
    if config is None:
        LOGGER.debug("No OTLP endpoint configured; tracing stays disabled")
        return False

    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

    exporter = OTLPSpanExporter(
        endpoint=config.endpoint,
        headers=dict(config.headers) if config.headers else None,
        timeout=config.timeout,
        certificate_file=config.certificate_file,
    )
    service_name = os.getenv("OTEL_SERVICE_NAME", DEFAULT_SERVICE_NAME)
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}), sampler=build_sampler())
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    _INITIALISED = True
    LOGGER.info("OpenTelemetry tracing initialised for service '%s'", service_name)
    return True


def get_tracer() -> trace.Tracer:
    return trace.get_tracer(TRACER_NAME)


@contextmanager
def traced_span(name: str, **attributes: str | int | float | bool) -> Iterator[Span]:
    """Run the block inside a span; exceptions are recorded and re-raised."""

    with get_tracer().start_as_current_span(name, record_exception=False, set_status_on_exception=False) as span:
        for key, value in attributes.items():
            span.set_attribute(key.replace("__", "."), value)
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise


__all__ = [
    "DEFAULT_SERVICE_NAME",
    "OtlpConfig",
    "TRACER_NAME",
    "build_sampler",
    "get_tracer",
    "parse_headers",
    "setup_tracing",
    "traced_span",
]
