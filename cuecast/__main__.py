"""
Cuecast package __main__ entry point.

Allows running with: python -m cuecast
"""

from cuecast.app.cue_service import main

if __name__ == "__main__":
    main()
