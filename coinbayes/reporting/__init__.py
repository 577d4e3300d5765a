"""
coinbayes.reporting
===================

Pure-data views of session state: plot-ready series, history tables and
ledger event counts.
"""
