"""Shared infrastructure: base models, repository contract, middleware, health check."""
