# Path: provisioner/cli/__init__.py
"""
Provisioner CLI Module

Command-line installer for the FFmpeg executables.
"""

from provisioner.cli.install_cli import main

__all__ = ['main']
