"""
Backend package for the Hearth household-coordination service.

This package provides a FastAPI application around the challenge progress
and milestone recurrence engine, with storage abstractions so the same core
runs against Postgres in production and in-memory backends in tests.
"""
