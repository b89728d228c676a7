"""
API module for Ownergraph.

Provides REST API routes for:
- Portfolio (ownership graph) lookups by BBL
"""
