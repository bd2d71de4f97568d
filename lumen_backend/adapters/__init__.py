"""Adapters over the host operating system."""
