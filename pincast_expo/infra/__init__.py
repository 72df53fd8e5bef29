"""Infrastructure layer - configuration, auth, persistence plumbing."""
