"""Route Modules: one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter
    - Routes validate at the boundary and delegate IO to the repository
"""
