"""HTTP API for customer CSV imports."""
