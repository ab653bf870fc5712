"""
Run with: python -m mazebuilder
"""
import sys

from mazebuilder.main import main

if __name__ == "__main__":
    sys.exit(main())
