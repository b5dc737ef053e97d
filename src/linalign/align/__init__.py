"""
Alignment containers, scoring and the pairwise aligners.
"""
