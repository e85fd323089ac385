"""GIF API Package: random GIF lookup and snowflake-keyed inserts.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
