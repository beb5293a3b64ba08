"""collaboration_schema

Create the schema for watchlist collaboration:
- Users (read from the account system; search and invite preferences)
- Watch lists (custom and partner lists)
- Invites (friend, partner and list invites, direct or by code)
- Friendships, partnerships and list collaborators
- Notifications

Revision ID: 3c71d0e9a4b2
Revises:
Create Date: 2026-10-18 21:12:04.518342

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c71d0e9a4b2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "invite_policy": ("everyone", "connections_only", "nobody"),
    "watch_list_type": ("custom", "partner"),
    "invite_kind": ("friend", "partner", "list_direct", "list_code"),
    "invite_status": ("pending", "accepted", "declined", "cancelled", "expired"),
    "access_level": ("co_owner", "editor", "viewer"),
    "notification_type": (
        "collab_invite",
        "collab_accepted",
        "collab_declined",
        "collab_ended",
    ),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("username", sa.String(50), nullable=True),
        sa.Column("password_hash", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column(
            "show_in_search", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.Column(
            "allow_invites_from",
            _enum("invite_policy"),
            nullable=False,
            server_default="everyone",
        ),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("username"),
    )
    op.create_index("idx_users_username", "users", ["username"])
    op.create_index("idx_users_name", "users", ["name"])

    # ========================================================================
    # WATCH_LISTS table
    # ========================================================================
    op.create_table(
        "watch_lists",
        _uuid_pk(),
        sa.Column("owner_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "type", _enum("watch_list_type"), nullable=False, server_default="custom"
        ),
        sa.Column("is_shared", sa.Boolean(), nullable=False, server_default="false"),
        _created_at(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_watch_lists_owner_id", "watch_lists", ["owner_id"])

    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        _uuid_pk(),
        sa.Column("kind", _enum("invite_kind"), nullable=False),
        sa.Column("inviter_id", sa.BigInteger(), nullable=False),
        sa.Column("target_user_id", sa.BigInteger(), nullable=True),
        sa.Column("target_list_id", sa.UUID(), nullable=True),
        sa.Column("target_key", sa.String(128), nullable=False),
        sa.Column("code", sa.String(64), nullable=True),
        sa.Column(
            "status", _enum("invite_status"), nullable=False, server_default="pending"
        ),
        _created_at(),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("resolved_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("accepted_by_user_id", sa.BigInteger(), nullable=True),
        sa.Column(
            "metadata",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.ForeignKeyConstraint(["inviter_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["target_user_id"], ["users.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["target_list_id"], ["watch_lists.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["accepted_by_user_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_invites_code"),
        sa.CheckConstraint(
            "target_user_id IS NULL OR target_user_id <> inviter_id",
            name="ck_invites_not_self",
        ),
    )
    op.create_index(
        "idx_invites_inviter_id", "invites", ["inviter_id", "created_at"]
    )
    op.create_index(
        "idx_invites_target_user_status", "invites", ["target_user_id", "status"]
    )

    # Partial unique constraint: only one pending invite per (inviter, kind, target)
    op.execute("""
        CREATE UNIQUE INDEX uq_invites_pending_target
        ON invites (inviter_id, kind, target_key)
        WHERE status = 'pending'
    """)

    # ========================================================================
    # FRIENDSHIPS table (unordered pair stored as low/high)
    # ========================================================================
    op.create_table(
        "friendships",
        _uuid_pk(),
        sa.Column("user_low_id", sa.BigInteger(), nullable=False),
        sa.Column("user_high_id", sa.BigInteger(), nullable=False),
        sa.Column("invite_id", sa.UUID(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["user_low_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_high_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_low_id", "user_high_id", name="uq_friendships_pair"),
        sa.CheckConstraint("user_low_id < user_high_id", name="ck_friendships_ordered"),
    )
    op.create_index("idx_friendships_user_high_id", "friendships", ["user_high_id"])

    # ========================================================================
    # PARTNERSHIPS table (at most one partner per user)
    # ========================================================================
    op.create_table(
        "partnerships",
        _uuid_pk(),
        sa.Column("user_low_id", sa.BigInteger(), nullable=False),
        sa.Column("user_high_id", sa.BigInteger(), nullable=False),
        sa.Column("list_id", sa.UUID(), nullable=False),
        sa.Column("invite_id", sa.UUID(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["user_low_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_high_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["list_id"], ["watch_lists.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_low_id", "user_high_id", name="uq_partnerships_pair"
        ),
        sa.CheckConstraint(
            "user_low_id < user_high_id", name="ck_partnerships_ordered"
        ),
    )

    # One row per partnered user, so the primary key enforces a single partner
    op.create_table(
        "partner_memberships",
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("partnership_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["partnership_id"], ["partnerships.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_index(
        "idx_partner_memberships_partnership_id",
        "partner_memberships",
        ["partnership_id"],
    )

    # ========================================================================
    # LIST_COLLABORATORS table
    # ========================================================================
    op.create_table(
        "list_collaborators",
        _uuid_pk(),
        sa.Column("list_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column(
            "access", _enum("access_level"), nullable=False, server_default="editor"
        ),
        sa.Column("invite_id", sa.UUID(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["list_id"], ["watch_lists.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["invite_id"], ["invites.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "list_id", "user_id", name="uq_list_collaborators_list_user"
        ),
    )
    op.create_index(
        "idx_list_collaborators_user_id", "list_collaborators", ["user_id"]
    )

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        _uuid_pk(),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("type", _enum("notification_type"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "data",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_user_created",
        "notifications",
        ["user_id", sa.text("created_at DESC")],
    )
    op.execute("""
        CREATE INDEX idx_notifications_user_unread
        ON notifications (user_id)
        WHERE is_read = false
    """)

    # Trigger function to update updated_at timestamp
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER update_users_updated_at
        BEFORE UPDATE ON users
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS update_users_updated_at ON users")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("notifications")
    op.drop_table("list_collaborators")
    op.drop_table("partner_memberships")
    op.drop_table("partnerships")
    op.drop_table("friendships")
    op.drop_table("invites")
    op.drop_table("watch_lists")
    op.drop_table("users")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
