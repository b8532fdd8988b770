"""
Credit Calculation Engine

Pure calculation modules for car credit simulation.
Nothing in this package performs I/O or logs.
"""

from cliquealo.calculations import amortization, comparison, credit, errors, payment

__all__ = ["amortization", "comparison", "credit", "errors", "payment"]
