"""Kernel – error hierarchy shared by the metrics engine and its adapters."""
