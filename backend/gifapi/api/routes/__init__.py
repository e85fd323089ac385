"""Route Modules: one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter
    - Routes delegate storage and id generation to infrastructure/
"""
