"""Test helpers for the grove test suite."""
