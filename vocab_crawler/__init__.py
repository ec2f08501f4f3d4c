"""Harvest vocabulary entries from a paginated online dictionary."""
