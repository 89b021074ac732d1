"""
Generic utility functions shared across modules.

Includes random-source and id-generator abstractions for deterministic
testing, plus small numeric helpers.
"""
