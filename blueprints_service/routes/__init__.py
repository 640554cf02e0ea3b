"""Route blueprints package for API endpoints.

Currently a single Flask blueprint, ``blueprints``, exposing the CRUD
surface for author-owned point collections.
"""
