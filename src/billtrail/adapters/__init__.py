"""Adapters - concrete implementations of ports."""
