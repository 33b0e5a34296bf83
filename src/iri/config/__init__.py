"""Ambient configuration: settings and structlog setup.

The core value types never import from here.
"""
