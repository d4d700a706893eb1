"""
Command-line interface for the entity model registry.

Entry point: ``modelreg`` (see :mod:`modelreg.cli.app`).
"""
