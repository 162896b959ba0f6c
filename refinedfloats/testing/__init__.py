"""Testing helpers (requires hypothesis)."""
