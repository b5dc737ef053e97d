"""
Module containing package-wide utilities.
"""
from linalign.utils.resources import RESOURCES, Resources, jit
