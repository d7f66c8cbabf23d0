"""Web adapters (FastAPI)."""
