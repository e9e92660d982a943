"""
Run the interplay CLI.

Usage:
    python -m interplay check content.json --player player.json
"""

import sys

from .interface.cli import main

sys.exit(main())
