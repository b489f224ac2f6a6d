from dataclasses import dataclass
from pyrsistent import PSet, pset
from inventory_tui.types import ContainerID, ItemID, TagID


@dataclass(frozen=True)
class Item:
    """Tracked object inside exactly one container.

    Attributes:
        id: Item identifier.
        container_id: Owning container.
        name: Display name.
        tag_ids: Attached tag ids (optional, empty by default).
        amount: How many of the object are stored (unsigned 32-bit).
        notes: Free-form text.
    """

    id: ItemID
    container_id: ContainerID
    name: str
    tag_ids: PSet[TagID] = pset()
    amount: int = 1
    notes: str = ""
