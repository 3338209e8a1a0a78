"""Repository for TeamMember model operations."""

from stack_assist.models.team_member import TeamMember, MemberStatus
from stack_assist.repositories.base_repository import TenantScopedRepository


class TeamMemberRepository(TenantScopedRepository[TeamMember]):
    """Repository for TeamMember model operations"""

    model = TeamMember
    tenant_column = "owner_id"

    def get_by_email(self, owner_id: int, email: str) -> TeamMember | None:
        """
        Get a team's membership for an email.

        Args:
            owner_id: Tenant (owner) ID
            email: Lower-cased email address

        Returns:
            TeamMember object or None if not found
        """
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.owner_id == owner_id, TeamMember.email == email)
            .first()
        )

    def get_for_identity(self, identity_id: int) -> TeamMember | None:
        """
        Get the membership linked to an identity (any owner).

        The first record is the one the access guard evaluates.

        Args:
            identity_id: Identity ID of the caller

        Returns:
            TeamMember object or None if the identity is not a team member
        """
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.member_user_id == identity_id)
            .order_by(TeamMember.id)
            .first()
        )

    def get_pending_by_email(self, email: str) -> list[TeamMember]:
        """
        Get pending memberships for an email across all owners.

        Args:
            email: Lower-cased email address

        Returns:
            List of pending TeamMember objects
        """
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.email == email, TeamMember.status == MemberStatus.PENDING)
            .all()
        )
