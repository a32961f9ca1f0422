"""Tests for adapter implementations.

These tests exercise the simulated collaborators, the stdout view and
the CLI handler against real core services.
"""
