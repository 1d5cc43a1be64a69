"""Integration tests for recipeindex.

These tests require external dependencies:
- PostgreSQL (TEST_DATABASE_URL)
- Redis (TEST_REDIS_URL)

Run with: pytest tests/integration/ -v -m integration
Skip with: pytest -m "not integration"
"""
