"""Adapters – concrete backends for kernel ports."""
