"""Test utilities for storage helper tests."""
