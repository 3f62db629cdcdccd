"""Packing backend adapters."""
