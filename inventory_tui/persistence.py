"""JSON persistence for the inventory aggregate.

The whole :class:`Inventory` is written as one JSON document on every save::

    {
      "compartments": [{"id": 0, "name": "Garage", "container_ids": [0]}],
      "containers": [{"id": 0, "compartment_id": 0, "name": "Shelf1",
                      "item_ids": [], "tag_ids": []}],
      "items": [],
      "tags": [{"id": 0, "name": "fragile", "notes": ""}],
      "cnt_compartment": 1, "cnt_container": 1, "cnt_item": 0, "cnt_tag": 1
    }

Items additionally carry ``amount`` and ``notes``; tags carry ``notes``. All
three are optional on load (``1``, ``""`` and ``""``).

A decoded document must also pass :func:`validate` (ids below their counters,
parents and tags present, parent child lists in agreement) before it is
accepted; a file that fails is treated like an unreadable one.

:func:`dumps` / :func:`loads` round-trip the aggregate through bytes;
:func:`save_inventory` / :func:`load_inventory` add the file handling, and
:func:`open_inventory` performs the startup bootstrap (create the directory and
an empty document on first run, fall back to a temporary file when the primary
one cannot be used).
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set

from pyrsistent import pset, pvector

from inventory_tui.components import Compartment, Container, Item, Tag
from inventory_tui.errors import PersistenceError
from inventory_tui.inventory import Inventory
from inventory_tui.types import U32_MAX, EntityID, EntityKind, TagID
from inventory_tui.utils.lookup import (
    find_compartment,
    find_container,
    find_item,
    first_missing_tag,
)

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
FALLBACK_FILE_NAME = "inventory_tui-fallback.json"


def to_document(inventory: Inventory) -> Dict[str, Any]:
    """Return a JSON-friendly dict for ``inventory``. Tag id sets are sorted."""
    return {
        "compartments": [
            {"id": c.id, "name": c.name, "container_ids": list(c.container_ids)}
            for c in inventory.compartments
        ],
        "containers": [
            {
                "id": c.id,
                "compartment_id": c.compartment_id,
                "name": c.name,
                "item_ids": list(c.item_ids),
                "tag_ids": sorted(c.tag_ids),
            }
            for c in inventory.containers
        ],
        "items": [
            {
                "id": i.id,
                "container_id": i.container_id,
                "name": i.name,
                "tag_ids": sorted(i.tag_ids),
                "amount": i.amount,
                "notes": i.notes,
            }
            for i in inventory.items
        ],
        "tags": [
            {"id": t.id, "name": t.name, "notes": t.notes} for t in inventory.tags
        ],
        "cnt_compartment": inventory.cnt_compartment,
        "cnt_container": inventory.cnt_container,
        "cnt_item": inventory.cnt_item,
        "cnt_tag": inventory.cnt_tag,
    }


def _ids(values: Any) -> List[int]:
    if not isinstance(values, list):
        raise TypeError(f"expected a list of ids, got {type(values).__name__}")
    return [_u32(v) for v in values]


def _u32(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{value} does not fit in 32 unsigned bits")
    return value


def _check_ids(kind: EntityKind, entities: Sequence[Any], counter: int) -> None:
    seen: Set[EntityID] = set()
    for entity in entities:
        if entity.id >= counter:
            raise ValueError(f"{kind} {entity.id} is not below its counter {counter}")
        if entity.id in seen:
            raise ValueError(f"{kind} {entity.id} appears twice")
        seen.add(entity.id)


def _check_tags(inventory: Inventory, owner: str, tag_ids: Iterable[TagID]) -> None:
    missing = first_missing_tag(inventory, tag_ids)
    if missing is not None:
        raise ValueError(f"{owner} refers to unknown tag {missing}")


def validate(inventory: Inventory) -> None:
    """Check the structural invariants of a loaded inventory.

    Ids are unique per kind and below the kind's counter; every container and
    item points at an existing parent whose child list names it (and nothing
    else does); every attached tag exists.

    Raises:
        ValueError: Describing the first violation found.
    """
    _check_ids(EntityKind.TAG, inventory.tags, inventory.cnt_tag)
    _check_ids(
        EntityKind.COMPARTMENT, inventory.compartments, inventory.cnt_compartment
    )
    _check_ids(EntityKind.CONTAINER, inventory.containers, inventory.cnt_container)
    _check_ids(EntityKind.ITEM, inventory.items, inventory.cnt_item)

    for compartment in inventory.compartments:
        if len(set(compartment.container_ids)) != len(compartment.container_ids):
            raise ValueError(f"compartment {compartment.id} lists a container twice")
        for container_id in compartment.container_ids:
            container = find_container(inventory, container_id)
            if container is None or container.compartment_id != compartment.id:
                raise ValueError(
                    f"compartment {compartment.id} lists foreign container "
                    f"{container_id}"
                )
    for container in inventory.containers:
        parent = find_compartment(inventory, container.compartment_id)
        if parent is None or container.id not in parent.container_ids:
            raise ValueError(
                f"container {container.id} is not listed by compartment "
                f"{container.compartment_id}"
            )
        _check_tags(inventory, f"container {container.id}", container.tag_ids)
        if len(set(container.item_ids)) != len(container.item_ids):
            raise ValueError(f"container {container.id} lists an item twice")
        for item_id in container.item_ids:
            item = find_item(inventory, item_id)
            if item is None or item.container_id != container.id:
                raise ValueError(
                    f"container {container.id} lists foreign item {item_id}"
                )
    for item in inventory.items:
        parent = find_container(inventory, item.container_id)
        if parent is None or item.id not in parent.item_ids:
            raise ValueError(
                f"item {item.id} is not listed by container {item.container_id}"
            )
        _check_tags(inventory, f"item {item.id}", item.tag_ids)


def from_document(document: Mapping[str, Any]) -> Inventory:
    """Build an :class:`Inventory` from a decoded document.

    Raises:
        PersistenceError: If a field is missing, has the wrong type or is out
            of range, or if the result fails :func:`validate`.
    """
    try:
        inventory = Inventory(
            compartments=pvector(
                Compartment(
                    id=_u32(c["id"]),
                    name=str(c["name"]),
                    container_ids=pvector(_ids(c.get("container_ids", []))),
                )
                for c in document["compartments"]
            ),
            containers=pvector(
                Container(
                    id=_u32(c["id"]),
                    compartment_id=_u32(c["compartment_id"]),
                    name=str(c["name"]),
                    item_ids=pvector(_ids(c.get("item_ids", []))),
                    tag_ids=pset(_ids(c.get("tag_ids", []))),
                )
                for c in document["containers"]
            ),
            items=pvector(
                Item(
                    id=_u32(i["id"]),
                    container_id=_u32(i["container_id"]),
                    name=str(i["name"]),
                    tag_ids=pset(_ids(i.get("tag_ids", []))),
                    amount=_u32(i.get("amount", 1)),
                    notes=str(i.get("notes", "")),
                )
                for i in document["items"]
            ),
            tags=pvector(
                Tag(
                    id=_u32(t["id"]),
                    name=str(t["name"]),
                    notes=str(t.get("notes", "")),
                )
                for t in document["tags"]
            ),
            cnt_compartment=_u32(document["cnt_compartment"]),
            cnt_container=_u32(document["cnt_container"]),
            cnt_item=_u32(document["cnt_item"]),
            cnt_tag=_u32(document["cnt_tag"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise PersistenceError(f"malformed inventory document ({exc})") from exc
    try:
        validate(inventory)
    except ValueError as exc:
        raise PersistenceError(f"inconsistent inventory document ({exc})") from exc
    return inventory


def dumps(inventory: Inventory) -> bytes:
    return json.dumps(to_document(inventory), indent=2).encode(ENCODING)


def loads(data: bytes) -> Inventory:
    """Decode bytes produced by :func:`dumps`.

    Raises:
        PersistenceError: On invalid UTF-8/JSON or a malformed document.
    """
    try:
        document = json.loads(data.decode(ENCODING))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PersistenceError(f"invalid inventory file ({exc})") from exc
    if not isinstance(document, dict):
        raise PersistenceError("invalid inventory file (top level is not an object)")
    return from_document(document)


def save_inventory(inventory: Inventory, path: Path) -> None:
    """Write ``inventory`` to ``path`` atomically (temp file then rename).

    Raises:
        PersistenceError: If the file cannot be written.
    """
    data = dumps(inventory)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)
    except OSError as exc:
        raise PersistenceError(
            f"cannot write inventory ({exc.strerror or exc})", str(path)
        ) from exc


def load_inventory(path: Path) -> Inventory:
    """Read the inventory stored at ``path``.

    Raises:
        PersistenceError: If the file cannot be read or decoded.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise PersistenceError(
            f"cannot read inventory ({exc.strerror or exc})", str(path)
        ) from exc
    return loads(data)


@dataclass(frozen=True)
class OpenedInventory:
    """Result of the startup bootstrap.

    Attributes:
        inventory: Loaded (or fresh) inventory.
        path: File that ``:w`` writes to.
        banner: Diagnostic to show when the primary file could not be used.
    """

    inventory: Inventory
    path: Path
    banner: Optional[str] = None


def open_inventory(path: Path) -> OpenedInventory:
    """Load the inventory at ``path``, creating it on first run.

    If the file (or its directory) cannot be created or read, an empty
    inventory backed by a file in the system temp directory is returned
    instead, together with a banner explaining what happened. The primary file
    is never overwritten in that case.
    """
    try:
        if not path.exists():
            logger.info("creating empty inventory at %s", path)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise PersistenceError(
                    f"cannot create directory ({exc.strerror or exc})", str(path.parent)
                ) from exc
            save_inventory(Inventory(), path)
        inventory = load_inventory(path)
    except PersistenceError as exc:
        fallback = Path(tempfile.gettempdir()) / FALLBACK_FILE_NAME
        logger.error("using fallback store %s: %s", fallback, exc)
        return OpenedInventory(
            inventory=Inventory(),
            path=fallback,
            banner=f"{exc}; changes will be saved to {fallback}",
        )
    logger.info("loaded inventory from %s (%s)", path, dict(inventory.description))
    return OpenedInventory(inventory=inventory, path=path)
