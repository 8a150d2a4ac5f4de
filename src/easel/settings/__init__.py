"""Render settings: packaged YAML defaults and the validated settings model."""

from .schema import RenderSettings

__all__ = ["RenderSettings"]
