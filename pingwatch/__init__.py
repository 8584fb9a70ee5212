"""Endpoint reachability status derivation from ping probe records."""

__version__ = "0.1.0"
