from dataclasses import dataclass
from inventory_tui.types import TagID


@dataclass(frozen=True)
class Tag:
    """Named label attached to containers and items.

    Attributes:
        id: Tag identifier.
        name: Display name.
        notes: Free-form text.
    """

    id: TagID
    name: str
    notes: str = ""
