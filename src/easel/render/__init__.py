"""Rendering layer: backend contract, paint mapping, transforms and primitives."""
