"""Common type aliases and enumerations.

``SaveFn`` is the persistence extension point stored on
:class:`inventory_tui.app_state.AppState`; the dispatcher calls it for ``:w``
without knowing where (or whether) the snapshot ends up on disk.
"""

from enum import StrEnum, auto
from typing import Callable, TYPE_CHECKING


# Forward declaration to avoid circular imports:
if TYPE_CHECKING:
    from inventory_tui.inventory import Inventory

EntityID = int
TagID = EntityID
CompartmentID = EntityID
ContainerID = EntityID
ItemID = EntityID

# Ids, counters and item amounts are stored as unsigned 32-bit values.
U32_MAX = 2**32 - 1
MAX_ENTITY_ID: EntityID = U32_MAX
MAX_AMOUNT = U32_MAX

SaveFn = Callable[["Inventory"], None]


class View(StrEnum):
    """Panel shown in the main area above the input line."""

    MESSAGES = auto()
    OVERVIEW = auto()


class EntityKind(StrEnum):
    """Entity categories (used in diagnostics and the persisted counters)."""

    TAG = auto()
    COMPARTMENT = auto()
    CONTAINER = auto()
    ITEM = auto()
