"""Service layer for ENROLFLOW.

Implements the ingestion use-cases: routing envelopes to per-source pipelines,
reporting typed outcomes, and transforming batches with per-item results.
Calls domain functions and the outbound ports defined in `enrolflow.interfaces`.

Dependency rule: may import `enrolflow.domain` and `enrolflow.interfaces`, but
not `enrolflow.adapters` or `enrolflow.entrypoints`.
"""
