"""Shared fakes for the unit tests."""

__all__ = ["fakes"]
