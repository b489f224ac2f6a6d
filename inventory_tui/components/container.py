"""Container component.

A storage unit inside exactly one compartment. ``item_ids`` keeps creation
order; ``tag_ids`` has set semantics (attaching the same tag twice is a
no-op).
"""

from dataclasses import dataclass
from pyrsistent import PSet, PVector, pset, pvector
from inventory_tui.types import CompartmentID, ContainerID, ItemID, TagID


@dataclass(frozen=True)
class Container:
    """Storage unit owned by a compartment.

    Attributes:
        id: Container identifier.
        compartment_id: Owning compartment.
        name: Display name.
        item_ids: Ids of owned items in creation order.
        tag_ids: Attached tag ids.
    """

    id: ContainerID
    compartment_id: CompartmentID
    name: str
    item_ids: PVector[ItemID] = pvector()
    tag_ids: PSet[TagID] = pset()
