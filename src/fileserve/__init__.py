"""Fileserve - static files over plain HTTP."""
