"""
Entry point for running the repertoire package as a module.

Usage:
    python -m repertoire --help
    python -m repertoire --list
"""

from repertoire.cli import main

if __name__ == "__main__":
    main()
