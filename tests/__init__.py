"""ENROLFLOW test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- e2e/          : The `enrolflow` CLI driven through Click's CliRunner.
- fixtures/     : Factory fixtures for source payloads and envelopes (no tests here).

General guidance
- Keep unit fast and deterministic (no real I/O); prefer fakes over mocks at boundaries.
- e2e asserts user-observable results (stdout, stderr, exit codes, log files).
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Markers: unit, e2e, property
"""
