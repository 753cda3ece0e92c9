"""
Prometheus collectors for the store and shared UI state (monitoring & observability).
Collected in-process; exposing them is left to the embedding application.
"""

from prometheus_client import Counter, Gauge

STORE_MUTATIONS = Counter(
    "inventory_store_mutations_total",
    "Committed store mutations by operation.",
    ["operation"],
)

SHARED_STATE_SUBSCRIBERS = Gauge(
    "inventory_shared_state_subscribers",
    "Observers currently attached to a shared UI state.",
    ["state"],
)

SHARED_STATE_UPSTREAM_STARTS = Counter(
    "inventory_shared_state_upstream_starts_total",
    "Times a shared UI state (re)started collecting its upstream stream.",
    ["state"],
)
