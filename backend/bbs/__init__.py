"""BBS Application Package: public message board API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
