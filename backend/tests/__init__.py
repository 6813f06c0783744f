"""
Test Suite

This module contains all tests for the editorial workflow backend.

Structure:
    tests/
    ├── __init__.py         # This file
    ├── conftest.py         # Pytest fixtures (fixed clock, in-memory stores)
    ├── unit/               # Engine, service, scheduler and repository tests
    └── integration/        # API endpoint tests

To run tests:
    pytest tests/
    pytest tests/unit/
    pytest tests/integration/
"""
