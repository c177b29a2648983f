"""Core Layer — pure build resolution and content-type logic, no IO.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Capabilities (compiler, cacher) are reached only through the Protocols
      in capability_protocols.py
"""
