"""HTTP transports and response parsing."""
