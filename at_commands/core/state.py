"""Lifecycle state shared by the command builder and parser."""

from enum import Enum


class ComponentState(Enum):
    """State of a builder or parser chain.

    - ACTIVE: no error recorded; methods keep writing or consuming
    - ERRORED: an error was recorded; every further call is a no-op

    ERRORED is terminal, nothing leads back to ACTIVE.
    """
    ACTIVE = "active"
    ERRORED = "errored"
