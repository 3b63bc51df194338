"""
CLI entry point.

Usage:
    python -m masked_fastmail example.com
"""
from masked_fastmail.cli import main

if __name__ == "__main__":
    main()
