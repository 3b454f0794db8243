"""HTTP API of the admin console."""
