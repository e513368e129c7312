"""
Source-Checkout Runner
======================
Runs the meshing demo without installing the package.

Usage:
    $ python run.py --shape circle --max-level 5 --output /tmp/meshes

All arguments are forwarded to `treecutmesh.main`; see `--help`.
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from treecutmesh.main import main

if __name__ == "__main__":
    main(sys.argv[1:])
