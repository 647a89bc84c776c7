"""
Budgeting bounded context, domain layer.

Groups own profiles; profiles own transactions and budgets.
"""
