"""
Test package for storage helper.

- unit/: Unit and property tests for the manager, strategies and stores
- utils/: Shared sample types

Run tests with:
    pytest tests/
"""
