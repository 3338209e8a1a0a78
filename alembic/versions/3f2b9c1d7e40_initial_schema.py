"""initial_schema

Revision ID: 3f2b9c1d7e40
Revises:
Create Date: 2026-10-18 09:12:41.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2b9c1d7e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def _tenant_column() -> sa.Column:
    return sa.Column('user_id', sa.Integer(), nullable=False)


def upgrade() -> None:
    """
    Create the multi-tenant schema.

    Creates:
    - identities, auth_sessions (login and server-side sessions)
    - users (tenant profiles, sharing the identity id)
    - tenant-owned tables: clients, hosting_accounts, developer_accounts,
      sites, mobile_apps, tasks, notifications, notification_settings,
      messages
    - team_members, team_invites (owned through owner_id)
    """
    # 1. Identity provider
    op.create_table(
        'identities',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_identities_email', 'identities', ['email'], unique=True)

    op.create_table(
        'auth_sessions',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('identity_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('last_activity_at', sa.DateTime(), nullable=False),
        sa.Column('ended_at', sa.DateTime(), nullable=True),
        sa.Column('end_reason', sa.String(length=10), nullable=True),
        sa.ForeignKeyConstraint(['identity_id'], ['identities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_auth_sessions_identity_id', 'auth_sessions', ['identity_id'])

    # 2. Tenants
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['id'], ['identities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )

    # 3. Tenant-owned records
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('self_onboarded', sa.Boolean(), nullable=False),
        sa.Column('onboarded_at', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'email', name='uq_client_tenant_email'),
        sa.UniqueConstraint('user_id', 'phone', name='uq_client_tenant_phone'),
    )
    op.create_index('ix_clients_user_id', 'clients', ['user_id'])

    op.create_table(
        'hosting_accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('provider', sa.String(length=255), nullable=False),
        sa.Column('server_login_url', sa.String(length=500), nullable=True),
        sa.Column('host_type', sa.String(length=9), nullable=False),
        sa.Column('username', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('password_hint', sa.String(length=255), nullable=True),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=13), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_hosting_accounts_user_id', 'hosting_accounts', ['user_id'])
    op.create_index('ix_hosting_accounts_expiration_date', 'hosting_accounts', ['expiration_date'])

    op.create_table(
        'developer_accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('account_type', sa.String(length=6), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('mobile_number', sa.String(length=50), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('duns', sa.String(length=50), nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('date_created', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_developer_accounts_user_id', 'developer_accounts', ['user_id'])

    op.create_table(
        'sites',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=True),
        sa.Column('url', sa.String(length=500), nullable=True),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('client_name', sa.String(length=255), nullable=True),
        sa.Column('host_id', sa.Integer(), nullable=True),
        sa.Column('host_name', sa.String(length=255), nullable=True),
        sa.Column('domain_purchased_from', sa.String(length=255), nullable=True),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('name_changed', sa.Boolean(), nullable=False),
        sa.Column('old_domain_name', sa.String(length=255), nullable=True),
        sa.Column('old_domain_expiration_date', sa.Date(), nullable=True),
        sa.Column('amount_paid', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('amount_used_for_creation', sa.Numeric(precision=15, scale=2), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['host_id'], ['hosting_accounts.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_sites_user_id', 'sites', ['user_id'])
    op.create_index('ix_sites_expiration_date', 'sites', ['expiration_date'])

    op.create_table(
        'mobile_apps',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('app_name', sa.String(length=255), nullable=False),
        sa.Column('platform', sa.String(length=7), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('client_name', sa.String(length=255), nullable=True),
        sa.Column('app_domain', sa.String(length=500), nullable=True),
        sa.Column('date_created', sa.Date(), nullable=True),
        sa.Column('renewal_date', sa.Date(), nullable=True),
        sa.Column('ios_developer_account_id', sa.Integer(), nullable=True),
        sa.Column('google_developer_account_id', sa.Integer(), nullable=True),
        sa.Column('apple_live_url', sa.String(length=500), nullable=True),
        sa.Column('google_live_url', sa.String(length=500), nullable=True),
        sa.Column('app_cost', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('amount_spent', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('version', sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(
            ['ios_developer_account_id'], ['developer_accounts.id'], ondelete='SET NULL'
        ),
        sa.ForeignKeyConstraint(
            ['google_developer_account_id'], ['developer_accounts.id'], ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_mobile_apps_user_id', 'mobile_apps', ['user_id'])
    op.create_index('ix_mobile_apps_renewal_date', 'mobile_apps', ['renewal_date'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=11), nullable=False),
        sa.Column('priority', sa.String(length=6), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('status_history', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tasks_user_id', 'tasks', ['user_id'])

    # 4. Teams
    op.create_table(
        'team_members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('member_user_id', sa.Integer(), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=100), nullable=False),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=8), nullable=False),
        sa.Column('invited_by', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['member_user_id'], ['identities.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', 'email', name='uq_team_owner_email'),
    )
    op.create_index('ix_team_members_owner_id', 'team_members', ['owner_id'])
    op.create_index('ix_team_members_member_user_id', 'team_members', ['member_user_id'])
    op.create_index('ix_team_members_email', 'team_members', ['email'])

    op.create_table(
        'team_invites',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('owner_email', sa.String(length=255), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=8), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_team_invites_owner_id', 'team_invites', ['owner_id'])
    op.create_index('ix_team_invites_email', 'team_invites', ['email'])

    # 5. Notifications and messages
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('item_type', sa.String(length=7), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('item_name', sa.String(length=255), nullable=False),
        sa.Column('expiry_date', sa.Date(), nullable=False),
        sa.Column('notification_type', sa.String(length=10), nullable=False),
        sa.Column('status', sa.String(length=7), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    op.create_table(
        'notification_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('enable_email_notifications', sa.Boolean(), nullable=False),
        sa.Column('notify_one_month', sa.Boolean(), nullable=False),
        sa.Column('notify_two_weeks', sa.Boolean(), nullable=False),
        sa.Column('notify_three_days', sa.Boolean(), nullable=False),
        sa.Column('notify_on_expiry_day', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), nullable=False),
        _tenant_column(),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('sender_name', sa.String(length=255), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['identities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_messages_user_id', 'messages', ['user_id'])


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_table('messages')
    op.drop_table('notification_settings')
    op.drop_table('notifications')
    op.drop_table('team_invites')
    op.drop_table('team_members')
    op.drop_table('tasks')
    op.drop_table('mobile_apps')
    op.drop_table('sites')
    op.drop_table('developer_accounts')
    op.drop_table('hosting_accounts')
    op.drop_table('clients')
    op.drop_table('users')
    op.drop_table('auth_sessions')
    op.drop_table('identities')
