"""
Ingestion: page fetching, chunking, and embedding into the vector store.

Everything here runs once per source URL, offline, before any question
is asked.
"""
