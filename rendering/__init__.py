"""
Rendering package — projection helpers for the viewer.
"""
