"""Domain-layer error definitions.

The classifiers in this package are total and never raise; these errors
cover invalid configuration handed to the domain.
"""


class DomainError(Exception):
    """Base class for domain-layer errors."""


class InvalidTrainerCodeError(DomainError):
    """Raised when a trainer table entry cannot be matched against SKUs."""

    def __init__(self, code: str) -> None:
        super().__init__(
            f"Trainer code {code!r} must be non-empty and must not contain '-'."
        )
        self.code = code
