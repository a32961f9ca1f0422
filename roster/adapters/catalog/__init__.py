"""Course catalog adapters.

Implementations:
- Simulated (fixed course list, artificial latency, random failures)
"""
