"""Collaborator protocols and wire schemas."""
