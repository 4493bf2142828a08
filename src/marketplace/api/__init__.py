"""Marketplace HTTP API package."""
