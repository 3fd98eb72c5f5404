"""Request admission controls (rate limiting)."""
