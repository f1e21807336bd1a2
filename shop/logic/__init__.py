"""Core business logic layer.

Subpackages:
- tax: taxability classification and per-amount tax math
- shopping: order aggregation (subtotal, tax, total, budget variance)

Everything here is pure: the jurisdiction is always passed in by the caller.
"""
__all__ = ["tax", "shopping"]
