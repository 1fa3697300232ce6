"""Delay mocks with blocking and async methods, including one that checks its calls."""

__all__ = ["delay"]