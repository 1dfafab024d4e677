"""Domain layer: entity models, identifiers, timestamps, normalization.

Pure functions and models only. No file or network I/O lives here.
"""
