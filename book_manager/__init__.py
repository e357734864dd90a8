"""Book Manager - Core Application Package

This package contains the core application modules including:
- Data models (book.py)
- View/state controller (manager.py)
- Remote books service client (services/http_client.py)
"""
