"""Camada de aplicação: constantes, modelos de domínio e observabilidade."""
