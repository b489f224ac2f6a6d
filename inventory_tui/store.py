"""Inventory store mutators.

One ``add_*`` function per entity kind. Each is a pure function: it takes the
current :class:`Inventory`, validates every referenced id, and only then builds
and returns a new ``Inventory``. A call that raises leaves nothing behind: no
counter is bumped and no parent gains a dangling child id.

Id allocation reads the kind's counter, hands out its value, and stores the
incremented counter on the new aggregate. Counters never go down, so ids are
strictly increasing per kind and never reused.
"""

from dataclasses import replace
from typing import Iterable

from pyrsistent import pset

from inventory_tui.components import Compartment, Container, Item, Tag
from inventory_tui.errors import InventoryError, NotFoundError
from inventory_tui.inventory import Inventory
from inventory_tui.types import (
    MAX_AMOUNT,
    MAX_ENTITY_ID,
    CompartmentID,
    ContainerID,
    EntityID,
    EntityKind,
    TagID,
)
from inventory_tui.utils.lookup import index_of, require_tags


def _allocate(counter: int, kind: EntityKind) -> EntityID:
    # The bumped counter must still fit in 32 bits.
    if counter >= MAX_ENTITY_ID:
        raise InventoryError(f"{kind} ids exhausted")
    return counter


def add_tag(inventory: Inventory, name: str, notes: str = "") -> Inventory:
    """Return a new inventory with a tag named ``name`` appended."""
    tag_id = _allocate(inventory.cnt_tag, EntityKind.TAG)
    return replace(
        inventory,
        tags=inventory.tags.append(Tag(id=tag_id, name=name, notes=notes)),
        cnt_tag=tag_id + 1,
    )


def add_compartment(inventory: Inventory, name: str) -> Inventory:
    """Return a new inventory with an empty compartment appended."""
    compartment_id = _allocate(inventory.cnt_compartment, EntityKind.COMPARTMENT)
    return replace(
        inventory,
        compartments=inventory.compartments.append(
            Compartment(id=compartment_id, name=name)
        ),
        cnt_compartment=compartment_id + 1,
    )


def add_container(
    inventory: Inventory,
    name: str,
    compartment_id: CompartmentID,
    tag_ids: Iterable[TagID] = (),
) -> Inventory:
    """Create a container inside an existing compartment.

    Arguments:
        inventory:
            Current inventory.
        name:
            Container name.
        compartment_id:
            Owning compartment; must exist.
        tag_ids:
            Tags to attach; every one must exist or nothing is attached.

    Returns:
        Inventory
            New inventory with the container appended to ``containers`` and its
            id appended to the compartment's ``container_ids``.

    Raises:
        NotFoundError: If the compartment or any tag does not exist.
    """
    tag_ids = tuple(tag_ids)
    parent_idx = index_of(inventory.compartments, compartment_id)
    if parent_idx is None:
        raise NotFoundError(EntityKind.COMPARTMENT, compartment_id)
    require_tags(inventory, tag_ids)
    container_id = _allocate(inventory.cnt_container, EntityKind.CONTAINER)

    container = Container(
        id=container_id,
        compartment_id=compartment_id,
        name=name,
        tag_ids=pset(tag_ids),
    )
    parent = inventory.compartments[parent_idx]
    parent = replace(parent, container_ids=parent.container_ids.append(container_id))
    return replace(
        inventory,
        compartments=inventory.compartments.set(parent_idx, parent),
        containers=inventory.containers.append(container),
        cnt_container=container_id + 1,
    )


def add_item(
    inventory: Inventory,
    name: str,
    container_id: ContainerID,
    tag_ids: Iterable[TagID] = (),
    amount: int = 1,
    notes: str = "",
) -> Inventory:
    """Create an item inside an existing container.

    Raises:
        NotFoundError: If the container or any tag does not exist.
        InventoryError: If ``amount`` does not fit in 32 unsigned bits.
    """
    tag_ids = tuple(tag_ids)
    if not 0 <= amount <= MAX_AMOUNT:
        raise InventoryError(f"amount {amount} is out of range")
    parent_idx = index_of(inventory.containers, container_id)
    if parent_idx is None:
        raise NotFoundError(EntityKind.CONTAINER, container_id)
    require_tags(inventory, tag_ids)
    item_id = _allocate(inventory.cnt_item, EntityKind.ITEM)

    item = Item(
        id=item_id,
        container_id=container_id,
        name=name,
        tag_ids=pset(tag_ids),
        amount=amount,
        notes=notes,
    )
    parent = inventory.containers[parent_idx]
    parent = replace(parent, item_ids=parent.item_ids.append(item_id))
    return replace(
        inventory,
        containers=inventory.containers.set(parent_idx, parent),
        items=inventory.items.append(item),
        cnt_item=item_id + 1,
    )
