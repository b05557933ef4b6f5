"""Adapters – framework integrations (install extras to use them)."""
