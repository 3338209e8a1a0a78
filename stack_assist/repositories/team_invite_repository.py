from stack_assist.models.team_invite import TeamInvite, InviteStatus
from stack_assist.repositories.base_repository import TenantScopedRepository


class TeamInviteRepository(TenantScopedRepository[TeamInvite]):
    """Repository for TeamInvite records"""

    model = TeamInvite
    tenant_column = "owner_id"

    def get_pending_for(self, owner_id: int, email: str) -> list[TeamInvite]:
        """Pending invites from one owner to one email"""
        return (
            self.db.query(TeamInvite)
            .filter(
                TeamInvite.owner_id == owner_id,
                TeamInvite.email == email,
                TeamInvite.status == InviteStatus.PENDING,
            )
            .all()
        )
