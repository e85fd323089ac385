"""Core Layer: id generation and error taxonomy, no IO, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
"""
