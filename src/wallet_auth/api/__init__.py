"""HTTP API for wallet authentication."""
