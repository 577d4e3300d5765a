"""
coinbayes.core
==============

Shared infrastructure: names, errors, configuration and the ledger contracts.
"""
