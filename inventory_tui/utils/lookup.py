"""Id lookup helpers.

Entities are stored in flat vectors, so finding one by id needs a reverse
index. Indexes are cached per vector value: persistent vectors are hashable
and compare by content, so a mutated vector never hits a stale entry. The
cache saves rebuilding the dict, but each lookup still hashes (and on a hit
compares) the whole vector, so a lookup stays O(n) in the vector length.
"""

from functools import lru_cache
from typing import Iterable, Mapping, Optional, Protocol, Sequence, TypeVar

from inventory_tui.components import Compartment, Container, Item, Tag
from inventory_tui.errors import NotFoundError
from inventory_tui.inventory import Inventory
from inventory_tui.types import (
    CompartmentID,
    ContainerID,
    EntityID,
    EntityKind,
    ItemID,
    TagID,
)


class _HasID(Protocol):
    @property
    def id(self) -> EntityID: ...


E = TypeVar("E", bound=_HasID)


@lru_cache(maxsize=256)
def _id_index(entities: Sequence[_HasID]) -> Mapping[EntityID, int]:
    """Build a map from entity id to its position in ``entities``."""
    return {entity.id: idx for idx, entity in enumerate(entities)}


def index_of(entities: Sequence[E], entity_id: EntityID) -> Optional[int]:
    """Return the position of ``entity_id`` in ``entities`` or None."""
    return _id_index(entities).get(entity_id)


def _find(entities: Sequence[E], entity_id: EntityID) -> Optional[E]:
    idx = index_of(entities, entity_id)
    return None if idx is None else entities[idx]


def find_tag(inventory: Inventory, tag_id: TagID) -> Optional[Tag]:
    return _find(inventory.tags, tag_id)


def find_compartment(
    inventory: Inventory, compartment_id: CompartmentID
) -> Optional[Compartment]:
    return _find(inventory.compartments, compartment_id)


def find_container(
    inventory: Inventory, container_id: ContainerID
) -> Optional[Container]:
    return _find(inventory.containers, container_id)


def find_item(inventory: Inventory, item_id: ItemID) -> Optional[Item]:
    return _find(inventory.items, item_id)


def first_missing_tag(
    inventory: Inventory, tag_ids: Iterable[TagID]
) -> Optional[TagID]:
    """Return the first id in ``tag_ids`` with no matching tag, else None."""
    for tag_id in tag_ids:
        if index_of(inventory.tags, tag_id) is None:
            return tag_id
    return None


def require_tags(inventory: Inventory, tag_ids: Iterable[TagID]) -> None:
    """Raise :class:`NotFoundError` for the first unknown tag id."""
    missing = first_missing_tag(inventory, tag_ids)
    if missing is not None:
        raise NotFoundError(EntityKind.TAG, missing)


def items_in(inventory: Inventory, container: Container) -> list[Item]:
    """Return the container's items in creation order (unknown ids skipped)."""
    found = (find_item(inventory, item_id) for item_id in container.item_ids)
    return [item for item in found if item is not None]


def containers_in(inventory: Inventory, compartment: Compartment) -> list[Container]:
    """Return the compartment's containers in creation order."""
    found = (find_container(inventory, cid) for cid in compartment.container_ids)
    return [container for container in found if container is not None]


def tag_names(inventory: Inventory, tag_ids: Iterable[TagID]) -> list[str]:
    """Return tag names sorted by id (unknown ids skipped)."""
    found = (find_tag(inventory, tag_id) for tag_id in sorted(tag_ids))
    return [tag.name for tag in found if tag is not None]
