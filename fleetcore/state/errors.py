"""
Fleet Core State — Errors
=========================
Raised for misuse of the stores (programming errors), never for
recoverable runtime conditions.
"""


class StateError(Exception):
    """Base error for store operations."""
    pass


class ReentrantWriteError(StateError):
    """A listener tried to write the cell that is notifying it."""

    def __init__(self, cell_name: str):
        self.cell_name = cell_name
        super().__init__(
            f"Cell '{cell_name}' was written while notifying its listeners. "
            f"Derived values must be written to another cell."
        )


class UnitNotVisibleError(StateError):
    """Attempt to activate a business unit outside the visible set."""

    def __init__(self, unit_id: int, visible_ids: tuple[int, ...]):
        self.unit_id = unit_id
        self.visible_ids = visible_ids
        super().__init__(
            f"Business unit {unit_id} is not visible. "
            f"Visible units: {list(visible_ids)}."
        )


class UnitSwitchNotAllowedError(StateError):
    """The signed-in identity cannot choose among several units."""

    def __init__(self, identity_id: str | None):
        self.identity_id = identity_id
        super().__init__(
            f"Identity '{identity_id}' is not allowed to switch business units."
        )

