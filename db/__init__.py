"""
db/ - Database Layer
====================
Opens PostgreSQL connection pools, runs statements, and sets up the sample schema.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
