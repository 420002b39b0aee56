"""Web relay adapter (FastAPI)."""
