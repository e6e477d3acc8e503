"""Application layer: configuration, wiring and the FastAPI adapter."""
