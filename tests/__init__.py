# CryptoLab Test Suite
"""
Test suite including:
- Unit tests for the core math and statistics
- Flow tests for the RSA tool and hash visualizer
- Security tests (invalid inputs)
- CLI tests

Run with: pytest
"""
