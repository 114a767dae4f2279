"""Transport adapters (HTTP)."""
