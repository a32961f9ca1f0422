"""Roster: an in-memory student data layer with debounced search and
two-phase validation."""

__version__ = "0.1.0"
