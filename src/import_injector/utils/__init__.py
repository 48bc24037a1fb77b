"""
Utilities: console and logging helpers.
"""
