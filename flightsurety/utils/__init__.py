"""Utilities: configuration, alerts and exceptions."""
