"""Adapters (infrastructure) for ENROLFLOW.

Provide concrete implementations of the interfaces: per-source payload
parsers and transformers (webstore orders and products, accounting invoices)
and an in-memory record sink.

Dependency rule: may import `enrolflow.domain` and `enrolflow.interfaces`;
neither may import this package.
"""
