"""Personal budget package: categories with a target amount and their expenses.

Modules:
- config: budget.ini settings (last DB path, currency display)
- db: sqlite connection helpers and the row Store
- errors: validation, not-found and persistence errors
- models: category/transaction snapshots and derived totals
- validation: form checks returning lists of messages
- repository: category and transaction data access
- summary: overview DataFrame, currency formatting, status labels
- app: BudgetApp, opens the store and wires the repositories
"""
