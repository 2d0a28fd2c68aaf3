"""Domain errors raised by the nutrition core."""


class CatalogSyncError(Exception):
    """Fatal failure while streaming or storing the product dump."""


class CatalogEntryNotFoundError(LookupError):
    """Raised when a catalog code cannot be resolved."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Catalog entry not found: {code}")
        self.code = code


class IngredientNotFoundError(LookupError):
    """Raised when an ingredient row to link does not exist."""

    def __init__(self, ingredient_id: int) -> None:
        super().__init__(f"Ingredient not found: {ingredient_id}")
        self.ingredient_id = ingredient_id
