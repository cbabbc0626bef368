"""
Keyward Module Entry Point
===========================

Allows running the Keyward CLI via: python -m keyward
"""

from keyward.cli import main

if __name__ == "__main__":
    main()
