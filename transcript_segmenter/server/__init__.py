"""HTTP API for transcript segmentation (FastAPI + pydantic)."""
