"""Domain layer for ENROLFLOW.

Contains business rules: value objects, canonical records and the pure
classifiers that turn free-text fields into structured facts (transfer
designations, trainer codes in SKUs, invoice eligibility). Every function here
is total and side-effect free.

Dependency rule: do not import from `enrolflow.adapters`,
`enrolflow.service_layer` or `enrolflow.entrypoints`.
"""
