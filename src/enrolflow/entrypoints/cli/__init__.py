"""The ``enrolflow`` command-line interface."""
