#!/usr/bin/env python3
"""
Xbox Drive Convertor — Entry Point.

Usage:
    python main.py                       # usage
    sudo python main.py list             # raw disk access needs root
    sudo python main.py toggle
"""

import sys

from discmode.cli import main

if __name__ == "__main__":
    sys.exit(main())
