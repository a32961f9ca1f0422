"""Test suite for the Roster student data layer.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for adapter implementations
   - Simulated collaborators, presentation and CLI

3. fakes/: Port implementations for testing
   - In-memory implementations of CourseCatalogPort, RemoteValidationPort
   - A manually advanced clock for timestamp assertions
"""
