# Path: provisioner/__main__.py
"""Allow `python -m provisioner`."""

import sys

from provisioner.cli.install_cli import main

if __name__ == "__main__":
    sys.exit(main())
