"""Exceções de validação."""


class ValidationError(ValueError):
    """Entrada inválida detectada antes de qualquer chamada de rede."""
