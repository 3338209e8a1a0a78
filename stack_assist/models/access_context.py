"""Access context for request authorization."""

from dataclasses import dataclass
from stack_assist.core.exceptions import ForbiddenException
from stack_assist.models.identity import AuthSession, Identity
from stack_assist.models.permission import Action, Module
from stack_assist.models.team_member import TeamMember


@dataclass
class AccessContext:
    """
    Complete access context for request authorization.

    Built by the access guard after the session is validated. Every
    repository call is scoped with tenant_id, never with the caller's own id.

    Attributes:
        identity: The authenticated identity
        session: The open session behind the access token
        tenant_id: The tenant whose data the request reads and writes
        member: The caller's active TeamMember record, or None for an owner
    """

    identity: Identity
    session: AuthSession
    tenant_id: int
    member: TeamMember | None = None

    def is_owner(self) -> bool:
        """Owners access their own tenant with every permission."""
        return self.member is None

    def can_access(self, module: Module) -> bool:
        """Check if the caller may read the given module."""
        if self.is_owner():
            return True
        modules = self.member.permissions.get("modules", {})
        return bool(modules.get(module.value, False))

    def can(self, action: Action, module: Module) -> bool:
        """
        Check if the caller may perform a write action on a module.

        Members need both the module flag and the matching can_* flag.
        """
        if self.is_owner():
            return True
        if not self.can_access(module):
            return False
        return bool(self.member.permissions.get(f"can_{action.value}", False))

    def __repr__(self) -> str:
        return f"<AccessContext(identity_id={self.identity.id}, tenant_id={self.tenant_id}, owner={self.is_owner()})>"


def ensure_permission(context: AccessContext, module: Module, action: Action | None = None) -> None:
    """
    Raise unless the caller may read (action=None) or write the module.

    Raises:
        ForbiddenException: If the permission is missing
    """
    if action is None:
        if not context.can_access(module):
            raise ForbiddenException(f"No permission to access {module.value}")
    elif not context.can(action, module):
        raise ForbiddenException(f"No permission to {action.value} {module.value}")


def ensure_owner(context: AccessContext) -> None:
    """
    Raise unless the caller is the tenant owner.

    Raises:
        ForbiddenException: If the caller is a delegated team member
    """
    if not context.is_owner():
        raise ForbiddenException("Only the account owner can do this")
