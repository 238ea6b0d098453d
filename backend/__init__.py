"""Contract payment schedule backend."""
