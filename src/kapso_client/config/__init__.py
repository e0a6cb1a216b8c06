"""Configuração do cliente: settings e logging estruturado."""
