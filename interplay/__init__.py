"""
Interplay - prerequisite and progression core for narrative interactions.

Designers author interactions plus three kinds of progression tracks
(influence domains, prestige tracks, alignment axes). This package decides
which interactions a player can see and applies their effects back onto
the tracks.
"""

__version__ = "0.1.0"
