"""
Core analysis layers.
"""
