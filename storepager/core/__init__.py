"""Pagination core: request model, strategies, settings and store adapters."""
