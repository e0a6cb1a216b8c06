"""Utilitários compartilhados do kapso_client."""
