"""
Main entry point for oneiromancer when run as a module.

Allows execution via: python -m oneiromancer

oneiromancer/src/oneiromancer/__main__.py
"""

from .cli import main

if __name__ == "__main__":
    main()
