"""Levenshtein, LCS and Hamming edit distances with edit operations and cached scorers."""

__version__ = "0.1.0"