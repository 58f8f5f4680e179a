"""WaveTrim: silence-aware splitting, trimming and WAV export for decoded audio."""

__version__ = "0.3.0"
