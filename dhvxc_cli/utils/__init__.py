"""
Shared helpers for paths and console formatting.
"""
