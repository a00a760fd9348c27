"""CI/CD tooling tests.

This test suite contains unit tests for:
- Versions file loading and validation
- PyPI release lookup
- Matrix expansion, change filtering and splitting
- The set-matrix, list-changed-files and check-labels CLIs
"""
