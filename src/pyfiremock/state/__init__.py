"""State/store layer.

This package is the single source of truth for stored documents and the
listeners attached to them. Reference handles only hold a path and a
converter; every read, write and subscription goes through here.
"""
