"""Exactly rounded summation of floating-point numbers with small, large and automatic accumulators."""

__version__ = "0.1.0"
__all__ = ["small", "large", "auto", "selfcheck", "benchmark", "cli"]