"""
Financial API Test Suite.

This package contains:
- unit/: Unit tests (no network)
- integration/: Gateway client against an in-process gRPC server
"""
