"""Video catalog service: filtered listing and owner-only writes."""

__version__ = "0.1.0"
