"""
Orders domain: reconciliation, failure policy and the enrichment pipeline
"""

from .enrichment import (
    EnrichmentOptions,
    EnrichmentResult,
    EnrichmentStatus,
    OrderEnrichmentService,
    normalize_transaction,
)
from .failure_policy import (
    FAILURE_POLICIES,
    FailurePolicy,
    PolicyOutcome,
    UpstreamOperation,
    run_with_policy,
)
from .reconciler import (
    build_full_name,
    reconcile_customer,
    reconcile_shipping_address,
)

__all__ = [
    "EnrichmentOptions",
    "EnrichmentResult",
    "EnrichmentStatus",
    "OrderEnrichmentService",
    "normalize_transaction",
    "FAILURE_POLICIES",
    "FailurePolicy",
    "PolicyOutcome",
    "UpstreamOperation",
    "run_with_policy",
    "build_full_name",
    "reconcile_customer",
    "reconcile_shipping_address",
]
