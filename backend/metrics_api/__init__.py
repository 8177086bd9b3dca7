"""Contribution Metrics Package: users, GitHub organizations, and contributor identities.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
