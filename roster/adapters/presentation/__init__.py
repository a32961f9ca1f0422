"""Presentation adapters.

Implementations:
- Stdout (plain-text student cards, enrollment statistics)
"""
