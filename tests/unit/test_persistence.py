import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from inventory_tui.errors import PersistenceError
from inventory_tui.inventory import Inventory
from inventory_tui.persistence import (
    dumps,
    load_inventory,
    loads,
    open_inventory,
    save_inventory,
    to_document,
)
from inventory_tui.store import add_item, add_tag
from inventory_tui.types import MAX_AMOUNT, MAX_ENTITY_ID
from tests.test_utils import make_populated_inventory


def test_round_trip_bytes() -> None:
    inv, _ = make_populated_inventory()
    assert loads(dumps(inv)) == inv


def test_round_trip_empty() -> None:
    assert loads(dumps(Inventory())) == Inventory()


def test_round_trip_file(tmp_path: Path) -> None:
    inv, _ = make_populated_inventory()
    path = tmp_path / "inventory.json"
    save_inventory(inv, path)
    loaded = load_inventory(path)
    assert loaded == inv
    assert loaded.cnt_container == inv.cnt_container
    assert loaded.cnt_tag == inv.cnt_tag


def test_document_layout() -> None:
    inv, _ = make_populated_inventory()
    doc = to_document(inv)
    assert set(doc) == {
        "compartments",
        "containers",
        "items",
        "tags",
        "cnt_compartment",
        "cnt_container",
        "cnt_item",
        "cnt_tag",
    }
    assert doc["containers"][1]["tag_ids"] == [0, 1]
    assert doc["compartments"][0]["container_ids"] == [0]
    assert doc["items"][0] == {
        "id": 0,
        "container_id": 0,
        "name": "Drill",
        "tag_ids": [0],
        "amount": 1,
        "notes": "",
    }
    assert doc["tags"][1] == {"id": 1, "name": "fragile", "notes": ""}


def test_items_without_tag_ids_load() -> None:
    doc = to_document(make_populated_inventory()[0])
    del doc["items"][0]["tag_ids"]
    inv = loads(json.dumps(doc).encode("utf-8"))
    assert len(inv.items[0].tag_ids) == 0


def test_amount_and_notes_round_trip() -> None:
    inv, _ = make_populated_inventory()
    inv = add_item(inv, "Screws", 0, amount=MAX_AMOUNT, notes="M4, torx")
    inv = add_tag(inv, "spare", notes="keep two")
    loaded = loads(dumps(inv))
    assert loaded == inv
    assert loaded.items[1].amount == MAX_AMOUNT
    assert loaded.items[1].notes == "M4, torx"
    assert loaded.tags[2].notes == "keep two"


def test_amount_and_notes_default_when_absent() -> None:
    doc = _populated_document()
    del doc["items"][0]["amount"]
    del doc["items"][0]["notes"]
    del doc["tags"][0]["notes"]
    inv = _load(doc)
    assert inv.items[0].amount == 1
    assert inv.items[0].notes == ""
    assert inv.tags[0].notes == ""


@pytest.mark.parametrize(
    "data",
    [b"not json", b"[]", b'{"tags": []}', b"\xff\xfe", b'{"compartments": 3}'],
)
def test_malformed_documents_raise(data: bytes) -> None:
    with pytest.raises(PersistenceError):
        loads(data)


def test_negative_counter_rejected() -> None:
    doc = to_document(Inventory())
    doc["cnt_tag"] = -1
    with pytest.raises(PersistenceError):
        loads(json.dumps(doc).encode("utf-8"))


def _populated_document() -> Dict[str, Any]:
    return to_document(make_populated_inventory()[0])


def _load(doc: Dict[str, Any]) -> Inventory:
    return loads(json.dumps(doc).encode("utf-8"))


def _set_counter_below_ids(doc: Dict[str, Any]) -> None:
    doc["cnt_tag"] = 0


def _set_duplicate_tag_id(doc: Dict[str, Any]) -> None:
    doc["tags"][1]["id"] = 0


def _set_unknown_item_parent(doc: Dict[str, Any]) -> None:
    doc["items"][0]["container_id"] = 5


def _set_unknown_container_parent(doc: Dict[str, Any]) -> None:
    doc["containers"][1]["compartment_id"] = 7


def _set_unknown_item_tag(doc: Dict[str, Any]) -> None:
    doc["items"][0]["tag_ids"] = [9]


def _set_unknown_container_tag(doc: Dict[str, Any]) -> None:
    doc["containers"][0]["tag_ids"] = [0, 9]


def _drop_child_from_parent(doc: Dict[str, Any]) -> None:
    doc["containers"][0]["item_ids"] = []


def _list_foreign_child(doc: Dict[str, Any]) -> None:
    doc["compartments"][1]["container_ids"] = [1, 0]


def _list_missing_child(doc: Dict[str, Any]) -> None:
    doc["containers"][1]["item_ids"] = [3]


def _list_child_twice(doc: Dict[str, Any]) -> None:
    doc["compartments"][0]["container_ids"] = [0, 0]


def _set_oversized_counter(doc: Dict[str, Any]) -> None:
    doc["cnt_tag"] = 2**40


def _set_oversized_id(doc: Dict[str, Any]) -> None:
    doc["items"][0]["id"] = MAX_ENTITY_ID + 1


def _set_oversized_amount(doc: Dict[str, Any]) -> None:
    doc["items"][0]["amount"] = MAX_AMOUNT + 1


def _set_negative_amount(doc: Dict[str, Any]) -> None:
    doc["items"][0]["amount"] = -3


def _set_float_amount(doc: Dict[str, Any]) -> None:
    doc["items"][0]["amount"] = 1.5


@pytest.mark.parametrize(
    "corrupt",
    [
        _set_counter_below_ids,
        _set_duplicate_tag_id,
        _set_unknown_item_parent,
        _set_unknown_container_parent,
        _set_unknown_item_tag,
        _set_unknown_container_tag,
        _drop_child_from_parent,
        _list_foreign_child,
        _list_missing_child,
        _list_child_twice,
        _set_oversized_counter,
        _set_oversized_id,
        _set_oversized_amount,
        _set_negative_amount,
        _set_float_amount,
    ],
)
def test_inconsistent_documents_raise(
    corrupt: Callable[[Dict[str, Any]], None],
) -> None:
    doc = _populated_document()
    _load(doc)
    corrupt(doc)
    with pytest.raises(PersistenceError):
        _load(doc)


def test_counter_at_u32_max_loads() -> None:
    doc = _populated_document()
    doc["cnt_tag"] = MAX_ENTITY_ID
    assert _load(doc).cnt_tag == MAX_ENTITY_ID


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError):
        load_inventory(tmp_path / "missing.json")


def test_save_into_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError):
        save_inventory(Inventory(), tmp_path / "nope" / "inventory.json")


def test_open_creates_directory_and_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "cfg" / "inventory_tui" / "inventory.json"
    opened = open_inventory(path)
    assert path.exists()
    assert opened.inventory == Inventory()
    assert opened.path == path
    assert opened.banner is None
    assert json.loads(path.read_text())["cnt_item"] == 0


def test_open_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "inventory.json"
    inv = add_tag(Inventory(), "tools")
    save_inventory(inv, path)
    assert open_inventory(path).inventory == inv


def test_open_corrupt_file_falls_back(tmp_path: Path) -> None:
    path = tmp_path / "inventory.json"
    path.write_bytes(b"{broken")
    opened = open_inventory(path)
    assert opened.inventory == Inventory()
    assert opened.path != path
    assert opened.banner is not None
    # the primary file is left alone
    assert path.read_bytes() == b"{broken"


def test_open_inconsistent_file_falls_back(tmp_path: Path) -> None:
    path = tmp_path / "inventory.json"
    doc = _populated_document()
    doc["items"][0]["container_id"] = 5
    data = json.dumps(doc).encode("utf-8")
    path.write_bytes(data)
    opened = open_inventory(path)
    assert opened.inventory == Inventory()
    assert opened.path != path
    assert opened.banner is not None
    assert "item 0" in opened.banner
    assert path.read_bytes() == data
