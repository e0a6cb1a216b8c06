"""Builders de payload por canal."""
