"""
animeweek: a Jikan-backed weekly anime schedule proxy.

This package contains:
- `client`: Jikan API client with fixed-delay retries
- `schedule`: groups season listings by broadcast day
- `repository`: single-slot cache for the current season
- `service`: query façade used by the HTTP routes
- `web`: Flask application
"""

__all__ = ["client", "schedule", "repository", "service", "web"]
