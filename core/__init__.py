"""
Core package — configuration, clock, shared types and vector helpers.
"""
