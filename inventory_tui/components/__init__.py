"""inventory_tui.components
=================================

Aggregate import surface for the entity dataclasses held by
:class:`inventory_tui.inventory.Inventory`.

All entities are frozen ``@dataclass`` value objects with no behavior. They
reference each other by id only; ownership of every entity sits with the
inventory aggregate, and the functions in :mod:`inventory_tui.store` are the
only place new instances are built::

    from inventory_tui.components import Compartment, Container, Item, Tag
"""

from .compartment import Compartment
from .container import Container
from .item import Item
from .tag import Tag

__all__ = [
    "Compartment",
    "Container",
    "Item",
    "Tag",
]
