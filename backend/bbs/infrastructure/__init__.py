"""Infrastructure Layer: database access and cross-cutting concerns.

Invariants:
    - All storage failures leave this layer as StorageError
"""
