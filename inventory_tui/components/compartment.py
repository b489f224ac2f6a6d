"""Compartment component.

Root-level grouping. Holds back-references to its containers by id only; the
containers themselves live in ``Inventory.containers``.
"""

from dataclasses import dataclass
from pyrsistent import PVector, pvector
from inventory_tui.types import CompartmentID, ContainerID


@dataclass(frozen=True)
class Compartment:
    """Top-level storage grouping.

    Attributes:
        id: Compartment identifier.
        name: Display name.
        container_ids: Ids of owned containers in creation order.
    """

    id: CompartmentID
    name: str
    container_ids: PVector[ContainerID] = pvector()
