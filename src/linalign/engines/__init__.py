"""
Numerical kernels operating on encoded sequences.
"""
