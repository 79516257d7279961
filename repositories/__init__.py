"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific table.
Repositories return recordsets (lists of column-name mappings) or plain values.
"""
