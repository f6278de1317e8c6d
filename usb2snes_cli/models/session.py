"""Session lifecycle models."""

from enum import Enum


class SessionState(Enum):
    """
    Lifecycle of a bridge session.

    States are entered in order and never revisited.
    """

    CREATED = "created"
    ATTACHED = "attached"
    IN_USE = "in_use"
