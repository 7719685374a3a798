"""Entry points for ENROLFLOW.

Thin adapters that expose the application to the outside world (the CLI).
They parse input, call the bootstrap facades or pure domain helpers, and
render results. No business rules live here.
"""
