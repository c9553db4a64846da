"""
Backend package for the anonymous question board.

Questions live in a single JSON document that is duplicated across two
remote blob endpoints. This package provides the replicated document store,
the record operations built on top of it, and the FastAPI surface.
"""

