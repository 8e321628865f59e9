#!/usr/bin/env python3
"""
run.py - Main entry point for dropfour

Usage:
    python run.py play                 # play against the computer
    python run.py play --mode human    # two players at one keyboard
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dropfour.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
