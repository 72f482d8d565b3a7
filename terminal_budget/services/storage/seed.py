"""First-run example budget."""

from terminal_budget.models.budget import WalletFields
from terminal_budget.services.storage.interface import BudgetStorageInterface


EXAMPLE_BUDGET_NAME = "example"

EXAMPLE_WALLETS = [
    WalletFields(name="Cash Wallet", owner="User", type="cash", currency="USD", balance=250.75),
    WalletFields(name="Bank Account", owner="User", type="bank", currency="USD", balance=1500.00),
    WalletFields(name="Savings Fund", owner="User", type="bank", currency="EUR", balance=800.50),
    WalletFields(name="Investment Portfolio", owner="User", type="invest", currency="USD", balance=5000.00),
    WalletFields(name="Emergency Fund", owner="Family", type="bank", currency="USD", balance=2000.00),
]


def seed_example_budget(storage: BudgetStorageInterface) -> int:
    """
    Create the example budget with its sample wallets.

    Returns the number of wallets created. Raises whatever storage raises;
    the caller decides whether a failed seed matters.
    """
    storage.create_budget(EXAMPLE_BUDGET_NAME)
    for fields in EXAMPLE_WALLETS:
        storage.create_wallet(EXAMPLE_BUDGET_NAME, fields)
    return len(EXAMPLE_WALLETS)
