"""
Package entry point.

Allows running the application via:

    python -m recurcal

This simply forwards execution to recurcal.cli.main().
"""

from recurcal.cli import main

if __name__ == "__main__":
    main()
