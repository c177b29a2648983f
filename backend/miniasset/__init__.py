"""miniasset — on-demand build server for bundled CSS and JavaScript.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
