"""HTTP API for timber member sizing."""
