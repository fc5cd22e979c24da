"""Testing utilities – fakes for the blocklist ports."""
