"""Operational command-line utilities."""
