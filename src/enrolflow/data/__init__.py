"""Packaged configuration data."""
