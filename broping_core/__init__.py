"""
broping core service

REST API for users and bars, persisted in a key-value document store
"""

__version__ = "0.1.0"
