"""
Concept server: a FastAPI application whose persistence goes through
lifecycle-managed MongoDB collections.

Version: 1.0
"""

__version__ = "1.0.0"
