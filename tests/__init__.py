"""
Test Suite for the Portfolio Analytics Engine

Includes:
- Shared catalog fixtures (YAML and JSON snapshots)
- Unit tests live beside each package in <package>/tests/
"""
