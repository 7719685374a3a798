"""Interfaces (application boundary) for ENROLFLOW.

Defines framework-free application contracts: the ingestion envelope DTO, the
generic `Transformer` protocol, the `RecordSink` port for the persistence
collaborator, and the error hierarchy shared by parsers and the service
layer. Business rules stay out of this package.

Dependency rule: may import `enrolflow.domain` types; do not import from
`enrolflow.adapters`, `enrolflow.service_layer` or `enrolflow.entrypoints`.
"""
