"""
Main entry point for the creativebuilder package when executed as a module.

This allows running the package with `python -m creativebuilder`.
"""

from creativebuilder.cli import main

if __name__ == '__main__':
    main()
