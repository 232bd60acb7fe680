"""
Test suite for the Inkfinity backend.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_trending_service.py -v
"""
