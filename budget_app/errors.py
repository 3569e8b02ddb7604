class BudgetAppError(Exception):
    """Base class for errors raised by the budget package."""


class ValidationError(BudgetAppError):
    """User input was rejected. ``messages`` holds every problem found."""

    def __init__(self, messages):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class NotFoundError(BudgetAppError):
    """An identity did not resolve to a stored row."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class PersistenceError(BudgetAppError):
    """The store failed to read, write or commit."""
