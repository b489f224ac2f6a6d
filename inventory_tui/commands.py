"""Command verb enumeration.

Defines the closed :class:`Verb` enum and the :data:`VERB_TABLE` that maps
every accepted spelling onto it. Lines are resolved to a ``Verb`` once, right
after tokenizing; handlers never compare raw strings.
"""

from enum import StrEnum, auto
from typing import Dict, List, Optional


class Verb(StrEnum):
    """String enum of command verbs.

    Members:
        QUIT, FORCE_QUIT, WRITE, WRITE_QUIT: Session and persistence.
        CLEAR, VIEW_MESSAGES, VIEW_OVERVIEW, HELP: View/state commands.
        ADD_TAG, ADD_COMPARTMENT, ADD_CONTAINER, ADD_ITEM: Inventory mutators.
    """

    QUIT = auto()
    FORCE_QUIT = auto()
    WRITE = auto()
    WRITE_QUIT = auto()
    CLEAR = auto()
    VIEW_MESSAGES = auto()
    VIEW_OVERVIEW = auto()
    HELP = auto()
    ADD_TAG = auto()
    ADD_COMPARTMENT = auto()
    ADD_CONTAINER = auto()
    ADD_ITEM = auto()


VERB_TABLE: Dict[str, Verb] = {
    ":q": Verb.QUIT,
    ":q!": Verb.FORCE_QUIT,
    ":w": Verb.WRITE,
    ":wq": Verb.WRITE_QUIT,
    ":ct": Verb.CLEAR,
    "cls": Verb.CLEAR,
    ":0": Verb.VIEW_MESSAGES,
    ":1": Verb.VIEW_OVERVIEW,
    ":help": Verb.HELP,
    ":?": Verb.HELP,
    "help": Verb.HELP,
    "?": Verb.HELP,
    "hlp": Verb.HELP,
    ":hlp": Verb.HELP,
    ":atag": Verb.ADD_TAG,
    ":acomp": Verb.ADD_COMPARTMENT,
    ":acont": Verb.ADD_CONTAINER,
    ":aitem": Verb.ADD_ITEM,
}


# Argument grammar shown in help and arity errors.
USAGE: Dict[Verb, str] = {
    Verb.ADD_TAG: "<name>",
    Verb.ADD_COMPARTMENT: "<name>",
    Verb.ADD_CONTAINER: "<name> <compartment_id> [tag_id...]",
    Verb.ADD_ITEM: "<name> <container_id> [tag_id...]",
}

# Prefixes the recall history starts with, one per creation verb.
HISTORY_TEMPLATES: List[str] = [":atag ", ":acomp ", ":acont ", ":aitem "]

HELP_LINES: List[str] = [
    ":q                  quit (refuses with unsaved changes)",
    ":q!                 quit without saving",
    ":w                  save the inventory",
    ":wq                 save, then quit",
    ":ct | cls           clear this pane",
    ":0 | :1             show messages | overview",
    ":help | :? | ?      show this help",
    ":atag <name>        add a tag",
    ":acomp <name>       add a compartment",
    ":acont <name> <compartment_id> [tag_id...]  add a container",
    ":aitem <name> <container_id> [tag_id...]    add an item",
    'quote names with spaces: :acomp "Garage North"',
]


def resolve_verb(token: str) -> Optional[Verb]:
    """Return the verb spelled by ``token`` or None if unknown."""
    return VERB_TABLE.get(token)


