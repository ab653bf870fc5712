"""
Entry Point Script (Bootstrap)
==============================
Starts the application from a source checkout, without installing it.

It modifies 'sys.path' so Python can resolve imports like
'from mazebuilder.model...' from the 'src' directory.

Usage:
    $ python run.py [--profile wide] [--settings mazebuilder.ini]
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from mazebuilder.main import main

if __name__ == "__main__":
    sys.exit(main())
