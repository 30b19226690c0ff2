#!/usr/bin/env python3
"""
run.py - Main entry point for dropfour

Examples:

    # Play against the medium AI
    python run.py play --difficulty medium

    # Let the expert AI move first
    python run.py play --difficulty expert --ai-first

    # Easy vs Hard for 20 games with a fixed seed
    python run.py --seed 7 match --one easy --two hard --games 20

    # Ask every tier for a move in a given position
    python run.py analyze --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,1,1,1,0,0,0

    # Time depth-5 searches
    python run.py benchmark --depth 5 --iterations 3
"""

import sys

from dropfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
