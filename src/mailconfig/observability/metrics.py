"""Prometheus metrics for mailconfig."""

from prometheus_client import Counter, Histogram

auth_failures_total = Counter(
    "mailconfig_auth_failures_total",
    "Rejected bearer token presentations",
    ["reason"],  # reason: no_token|bad_token
)

mutations_total = Counter(
    "mailconfig_mutations_total",
    "Administrative mutations applied",
    ["resource", "action"],  # resource: domain|entry|key|token|user
)

key_generation_seconds = Histogram(
    "mailconfig_key_generation_seconds",
    "Time spent generating domain signing keys",
    ["bits"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
