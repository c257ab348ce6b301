# app/api/__init__.py
"""HTTP interface for the hotel engine."""
