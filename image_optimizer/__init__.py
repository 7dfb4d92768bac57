"""
On-demand image transform proxy with an on-disk result cache.
"""

__version__ = "0.1.0"
