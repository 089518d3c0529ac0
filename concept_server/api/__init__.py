"""
API package: transport-agnostic actions and their HTTP endpoints.

Version: 1.0
"""

from concept_server.api.routes import Routes

__all__ = ["Routes"]
