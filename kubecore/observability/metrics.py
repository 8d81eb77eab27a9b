"""Prometheus metrics for kubecore API traffic."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# Request metrics
api_requests_total = Counter(
    "kubecore_requests_total",
    "Total API requests issued, by HTTP method, resource and response code",
    ["method", "resource", "code"],
)

api_request_duration_seconds = Histogram(
    "kubecore_request_duration_seconds",
    "API request duration in seconds",
    ["method", "resource"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# Credential metrics
credential_files_written_total = Counter(
    "kubecore_credential_files_written_total",
    "Total decoded credential files persisted to disk",
    ["material"],
)
