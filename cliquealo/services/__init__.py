"""
Application services module.
"""

from cliquealo.services.credits import (
    create_credit,
    get_amortization_table,
    simulate_credit,
    update_credit_status,
    update_credit_terms,
)

__all__ = [
    "create_credit",
    "get_amortization_table",
    "simulate_credit",
    "update_credit_status",
    "update_credit_terms",
]
