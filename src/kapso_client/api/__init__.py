"""Camada de borda: conectores, validadores e builders de payload."""
