"""Principal capability protocol.

Anything that can hold roles exposes a (type, id) reference and, optionally,
a pinned guard name. PrincipalRef is the shipped implementation, but host
application models can satisfy this protocol directly.
"""

from typing import Protocol


class PrincipalProtocol(Protocol):
    """Structural interface for role holders.

    Attributes:
        principal_type: Kind of principal (e.g., "User").
        principal_id: Identifier of the principal, as text.
        guard_name: Pinned guard, or None to use configured guards.
    """

    @property
    def principal_type(self) -> str: ...

    @property
    def principal_id(self) -> str: ...

    @property
    def guard_name(self) -> str | None: ...
