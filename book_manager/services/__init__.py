"""Book Manager - Services Package

This package contains service modules for external integrations:
- HTTP client for the remote books API
"""
