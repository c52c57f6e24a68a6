"""
Cuecast - sequential media-cue scheduler.

Callers submit "play this clip" requests tagged with a priority; exactly one
clip plays at a time and playback advances automatically when it finishes.
"""

__version__ = "0.1.0"
