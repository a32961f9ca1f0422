"""External adapters for the Roster student data layer.

This package contains everything that stands in for the outside world
and provides implementations of the core port interfaces.

Adapter Organization:

- catalog/: Course catalog collaborators (simulated remote catalog)
- validation/: Remote validation collaborators (simulated uniqueness check)
- presentation/: Rendering of the projection to a terminal
- cli/: Interactive command shell driving a roster session
"""
