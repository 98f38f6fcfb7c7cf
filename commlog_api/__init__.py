"""HTTP API for the communication log service."""
