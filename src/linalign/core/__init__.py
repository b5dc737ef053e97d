"""
Core sequence representation.
"""
