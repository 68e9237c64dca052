"""friend-links: reachability checks for a curated friend-link list."""

__version__ = "1.0.0"
