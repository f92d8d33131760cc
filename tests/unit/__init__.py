"""Unit tests for individual components in isolation.

Ensures fast execution with no network access.

Coverage:
    - parsing/: PDF validation and axiom response parsing
    - agent/: Configuration and the session lifecycle
    - ui/: View controller sequencing and text helpers

Leverages pytest-check for multiple assertions per test.
"""
