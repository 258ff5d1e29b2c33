"""
Convenience entry point for running periodfinder as a module.

Usage: python -m periodfinder [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
