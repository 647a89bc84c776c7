"""
Infrastructure adapters for the budgeting bounded context.

Each repository implements a domain port (ABC) on top of MongoDB.
"""
