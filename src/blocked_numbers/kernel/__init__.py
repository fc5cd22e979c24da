"""Kernel – errors, time, phone normalization, blocklist records and ports."""
