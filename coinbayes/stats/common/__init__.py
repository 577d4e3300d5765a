"""
coinbayes.stats.common
======================

Generic, reusable statistical methods shared by every scheme.
"""
