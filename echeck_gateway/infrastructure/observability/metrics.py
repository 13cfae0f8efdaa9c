"""Prometheus metrics for payout volume, provider health, and check printing"""

from prometheus_client import Counter, Histogram

# Payout metrics
payout_counter = Counter(
    "echeck_payout_total",
    "Total payouts issued",
    ["delivery_method", "outcome"],  # print | stripe, succeeded | failed
)

payout_amount_bucket_counter = Counter(
    "echeck_payout_amount_bucket",
    "Payout amounts by bucket",
    ["bucket"],  # <$100, $100-$1k, $1k-$10k, $10k+
)

# Stripe metrics
stripe_latency_histogram = Histogram(
    "stripe_payout_latency_seconds",
    "Stripe payout API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

stripe_failure_counter = Counter(
    "stripe_payout_failures_total",
    "Failed Stripe payout calls",
)

# Memo assistant metrics
memo_failure_counter = Counter(
    "memo_assistant_failures_total",
    "Failed memo suggestion calls",
)

check_render_counter = Counter(
    "echeck_check_render_total",
    "Check instruments rendered for printing",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_payout(delivery_method: str, succeeded: bool, amount_cents: int) -> None:
    """Record payout metrics for monitoring volume by channel"""
    outcome = "succeeded" if succeeded else "failed"
    payout_counter.labels(delivery_method=delivery_method, outcome=outcome).inc()

    if not succeeded:
        return

    if amount_cents < 10_000:
        bucket = "<$100"
    elif amount_cents < 100_000:
        bucket = "$100-$1k"
    elif amount_cents < 1_000_000:
        bucket = "$1k-$10k"
    else:
        bucket = "$10k+"

    payout_amount_bucket_counter.labels(bucket=bucket).inc()
