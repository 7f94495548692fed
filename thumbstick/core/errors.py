"""
Thumbstick Error Taxonomy.
Only two things can actually fail: a bad config and a tracker that won't start.
Untracked hands/joints are NOT errors (they are modeled as None).
"""


class ConfigurationError(ValueError):
    """Raised at construction when thresholds would yield a degenerate signal."""


class TrackingUnavailableError(RuntimeError):
    """Raised by start() when the tracking source cannot be acquired."""
