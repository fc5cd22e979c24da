"""Application – use-case layer: store, matching, notifications."""
