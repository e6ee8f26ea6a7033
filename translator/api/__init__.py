"""HTTP boundary: FastAPI app and wire formats."""
