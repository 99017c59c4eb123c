"""
Serving: FastAPI application exposing ingestion and question answering.
"""
