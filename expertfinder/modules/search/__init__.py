"""
Search Module - Black Box Interface

Purpose: Find expert profile links for a topic and location
Interface: GoogleSearchClient.search()
Hidden: Query syntax, result ranking, provider API details
"""

from .google import GoogleSearchClient, build_query

__all__ = ["GoogleSearchClient", "build_query"]
