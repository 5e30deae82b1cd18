"""FastAPI application for hotel discovery."""
