"""
propscore
Property intelligence aggregation and buyer match scoring.
"""

__version__ = "0.1.0"
