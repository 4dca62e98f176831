"""
Generic utility modules shared across the package.

Includes clock and scheduler abstractions, logging setup, random number
generation, and error classes.
"""
