"""Observability – logging configuration and logger access."""
