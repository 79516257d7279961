"""
models/ - Result Types
======================
Plain dataclasses passed between the database layer and the console examples.
"""
