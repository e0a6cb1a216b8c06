"""Conectores externos."""
