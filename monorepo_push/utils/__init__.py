"""Logging setup and CI output helpers."""
