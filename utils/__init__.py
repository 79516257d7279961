"""
utils/ - Shared Helpers
=======================
Logging setup and console formatting used by every layer.
"""
