"""Shared cross-layer types and exceptions."""

from packit.shared.exceptions import DataShapeError, TransportError

__all__ = ["DataShapeError", "TransportError"]
