"""
Core business logic - framework-agnostic.
Used by the web API and operator scripts.
"""
