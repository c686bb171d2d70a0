"""slimpdf HTTP backend."""
