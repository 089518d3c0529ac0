"""
Concept Server Test Suite
Version: 1.0
Purpose: Unit tests for the persistence framework and concepts, plus API tests
driving the application actions directly and over HTTP.
"""
