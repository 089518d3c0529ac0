"""
Core utilities: exceptions, logging and password hashing.

Version: 1.0
"""
