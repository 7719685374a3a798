"""Bootstrap (composition root) for ENROLFLOW.

Assembles the application at runtime: loads the trainer table once, wires the
per-source parsers and transformers into receiver routes, and attaches the
record sink.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `enrolflow.adapters`, `enrolflow.service_layer`,
  `enrolflow.interfaces`, `enrolflow.domain`, and `enrolflow.config`.
- Inner layers must not import `enrolflow.bootstrap`.

Public surface:
- Re-export composition factories from this module; keep wiring helpers internal.
- No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    build_receiver,
    build_routes,
    load_trainers,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "build_receiver",
    "build_routes",
    "load_trainers",
]
