"""HTTP API for knight trails."""
