"""ENROLFLOW

Ingestion core for course-booking data. Raw change events from a webstore
(orders, course products) and an accounting system (invoices) are routed,
filtered and normalized into canonical orders, enrolments, course schedules
and transfers, ready for a persistence layer to store.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
