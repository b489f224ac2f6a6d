"""Error taxonomy.

Every failure a typed command can run into derives from
:class:`InventoryError`. The dispatcher catches that base class per command
and turns it into a single line in the message pane, so none of these ever
ends the process.
"""

from typing import Optional

from inventory_tui.types import EntityID, EntityKind


class InventoryError(Exception):
    """Base class for recoverable inventory errors."""


class ParseError(InventoryError):
    """An id argument is not a valid unsigned 32-bit integer."""

    def __init__(self, text: str, what: str = "id") -> None:
        super().__init__(f"'{text}' is not a valid {what}")
        self.text = text


class NotFoundError(InventoryError):
    """A referenced parent or foreign id does not exist."""

    def __init__(self, kind: EntityKind, entity_id: EntityID) -> None:
        super().__init__(f"{kind} {entity_id} does not exist")
        self.kind = kind
        self.entity_id = entity_id


class ArityError(InventoryError):
    """Wrong number of arguments for a verb."""

    def __init__(self, verb: str, usage: str) -> None:
        super().__init__(f"wrong number of arguments, usage: {verb} {usage}".rstrip())
        self.verb = verb
        self.usage = usage


class PersistenceError(InventoryError):
    """Loading or saving the inventory failed (I/O or (de)serialization)."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message if path is None else f"{message}: {path}")
        self.path = path
