"""Layered environment-variable contexts: config loading, resolution, diffing, export, encryption and stores."""

__version__ = "0.1.0"