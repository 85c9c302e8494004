"""
Run with: python -m sn2simulation
"""
import sys

from sn2simulation.main import main

if __name__ == "__main__":
    sys.exit(main())
