#!/usr/bin/env python
"""
VisiAI Runner
Quick script to run the VisiAI CLI from a source checkout
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from visiai.cli import run

if __name__ == "__main__":
    run()
