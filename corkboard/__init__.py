"""
Corkboard - Anonymous, password-gated bulletin boards

An in-memory content store of boards, threads and messages where every
item can be flagged, or deleted by whoever holds its secret.
"""

__version__ = "0.1.0"
__author__ = "Corkboard Project"
