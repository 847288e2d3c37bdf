"""API module for the video catalog.

- Validates request bodies, resolves the principal, injects sessions
- Delegates all catalog decisions to video_catalog.catalog
"""
