"""
coinbayes.stats.schemes
=======================

Scheme-specific implementations built on `coinbayes.stats.common`.
"""
