"""
NOM Tools - incremental charting indicators.

Heikin-Ashi smoothing, linear regression channel, VWAP bands and a
colored price line, computed one bar at a time.
"""

__version__ = "1.0.0"
