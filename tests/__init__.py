"""
sample-app Test Suite.

- unit/: store, greeting, Lambda adapter, settings, logging and metrics tests
- integration/: API tests against the FastAPI application
- load/: Locust load profile for a running instance
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
Run with coverage: pytest --cov=sample_app
"""
