"""Command-line interface."""
from treecutmesh.main import main


if __name__ == "__main__":
    main()
