"""Infrastructure Layer — filesystem-backed collaborators and logging.

Invariants:
    - Every OSError from the filesystem is mapped to a MiniAssetError subclass
    - Concrete classes satisfy the Protocols in core/capability_protocols.py
"""
