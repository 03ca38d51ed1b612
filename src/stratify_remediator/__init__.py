"""Stratify remediator: layered module structure checks and automatic repairs."""

__version__ = "0.3.0"
