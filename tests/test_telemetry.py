from __future__ import annotations

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_OFF, ParentBased, TraceIdRatioBased
from opentelemetry.trace import StatusCode

from utils import telemetry


def test_parse_headers_skips_malformed_fragments() -> None:
    assert telemetry.parse_headers("a=1, b = two ,junk,=x") == {"a": "1", "b": "two"}
    assert telemetry.parse_headers(None) == {}


def test_build_sampler_defaults_to_parent_based_ratio() -> None:
    sampler = telemetry.build_sampler("", "0.25")
    assert isinstance(sampler, ParentBased)


def test_build_sampler_clamps_ratio_and_honours_names() -> None:
    ratio = telemetry.build_sampler("traceidratio", "7")
    assert isinstance(ratio, TraceIdRatioBased)
    assert ratio.rate == 1.0
    assert telemetry.build_sampler("always_off", "") is ALWAYS_OFF
    assert isinstance(telemetry.build_sampler("bogus", ""), ParentBased)


def test_otlp_config_requires_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
    assert telemetry.OtlpConfig.from_env() is None

    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4318/v1/traces")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_HEADERS", "x-token=abc")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_TIMEOUT", "nope")
    config = telemetry.OtlpConfig.from_env()
    assert config is not None
    assert config.endpoint == "http://collector:4318/v1/traces"
    assert config.headers == {"x-token": "abc"}
    assert config.timeout is None


def test_setup_tracing_is_noop_without_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
    assert telemetry.setup_tracing(force=True) is False


def test_traced_span_records_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(telemetry, "get_tracer", lambda: provider.get_tracer("test"))

    with pytest.raises(RuntimeError):
        with telemetry.traced_span("room_wizard.submit", room__timer_minutes=15):
            raise RuntimeError("boom")

    (span,) = exporter.get_finished_spans()
    assert span.name == "room_wizard.submit"
    assert span.attributes["room.timer_minutes"] == 15
    assert span.status.status_code is StatusCode.ERROR
    assert span.events[0].name == "exception"
