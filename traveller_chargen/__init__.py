"""Traveller character generation: multi-term career progression engine"""

__version__ = "0.1.0"
