"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConfigurationError,
    KapsoClientError,
    ProxyRequiredError,
)

__all__ = [
    "ConfigurationError",
    "KapsoClientError",
    "ProxyRequiredError",
]
