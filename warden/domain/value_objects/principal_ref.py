"""Principal reference value object.

Any entity that can hold roles (a user, an API client, a device) is referred
to by its (principal_type, principal_id) pair. Warden never loads the
principal itself.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class PrincipalRef:
    """Reference to a principal usable for edge lookups.

    Attributes:
        principal_type: Kind of principal (e.g., "User").
        principal_id: Identifier of the principal, as text.
        guard_name: Explicit guard pinned on the principal. When None, the
            guard resolver derives acceptable guards from configuration.

    Example:
        >>> user = PrincipalRef(principal_type="User", principal_id="42")
        >>> api_client = PrincipalRef(
        ...     principal_type="Client", principal_id="7", guard_name="api"
        ... )
    """

    principal_type: str
    principal_id: str
    guard_name: str | None = None

    def __post_init__(self) -> None:
        """Validate the reference."""
        if not self.principal_type:
            raise ValueError("principal_type must not be empty")
        if not self.principal_id:
            raise ValueError("principal_id must not be empty")
