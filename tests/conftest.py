"""Global pytest fixtures for ENROLFLOW."""

pytest_plugins = [
    "tests.fixtures.payloads",
]
