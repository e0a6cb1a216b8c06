"""Validadores de entrada (executados antes de qualquer IO)."""
