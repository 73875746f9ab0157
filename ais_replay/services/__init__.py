"""Encoding and transport services."""
