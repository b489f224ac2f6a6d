"""Immutable ``Inventory`` aggregate root.

The :class:`Inventory` dataclass is the single owner of every entity in the
tracker. Compartments, containers, items and tags live in flat persistent
vectors (``pyrsistent.PVector``) in creation order; parent/child links are
expressed purely by id. Each entity kind carries its own counter holding the
next id to hand out.

Design notes:

* Every mutation goes through :mod:`inventory_tui.store` and returns a *new*
    ``Inventory``. A failed mutation raises before anything is built, so the
    caller's value is untouched.
* Counters only ever grow. Since nothing is deleted, an id is never handed
    out twice for the same kind.
* The aggregate is the unit of persistence; see
    :mod:`inventory_tui.persistence` for the JSON document layout.
"""

from dataclasses import dataclass
from typing import Any
from pyrsistent import PMap, PVector, pmap, pvector

from inventory_tui.components import Compartment, Container, Item, Tag


@dataclass(frozen=True)
class Inventory:
    """Whole-store snapshot.

    Attributes:
        compartments (PVector[Compartment]): Root-level groupings.
        containers (PVector[Container]): All containers across compartments.
        items (PVector[Item]): All items across containers.
        tags (PVector[Tag]): All tags.
        cnt_compartment (int): Next compartment id.
        cnt_container (int): Next container id.
        cnt_item (int): Next item id.
        cnt_tag (int): Next tag id.
    """

    compartments: PVector[Compartment] = pvector()
    containers: PVector[Container] = pvector()
    items: PVector[Item] = pvector()
    tags: PVector[Tag] = pvector()

    cnt_compartment: int = 0
    cnt_container: int = 0
    cnt_item: int = 0
    cnt_tag: int = 0

    @property
    def description(self) -> PMap[str, Any]:
        """Entity totals keyed by kind, for the status line and logs."""
        return pmap(
            {
                "compartments": len(self.compartments),
                "containers": len(self.containers),
                "items": len(self.items),
                "tags": len(self.tags),
            }
        )
