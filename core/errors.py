# core/errors.py
"""Errors raised out of the resolver core. Everything else degrades to None."""


class FormatError(ValueError):
    """Input domain does not follow either supported syntax."""


class UnsupportedNetwork(ValueError):
    """Requested network is not configured (or has no RPC endpoint)."""
