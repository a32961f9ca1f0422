"""CLI adapter for interactive roster management.

Maps shell commands onto RosterPort operations.
"""
