"""Remote validation adapters.

Implementations:
- Simulated (denylist of taken emails behind an artificial delay)
"""
