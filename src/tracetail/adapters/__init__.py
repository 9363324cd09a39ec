"""Adapters implementing and consuming the core ports."""
