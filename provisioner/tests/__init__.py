# Path: provisioner/tests/__init__.py
"""Provisioner test suite."""
