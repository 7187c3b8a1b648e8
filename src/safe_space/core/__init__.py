"""Settings, errors, identity and authorization policy."""
