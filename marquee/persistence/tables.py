"""SQLAlchemy table definitions for Marquee.

These Core tables are used by the PostgreSQL repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the account system, read here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("username", String(50), nullable=True, unique=True),
    Column("password_hash", Text, nullable=True),
    Column("image", Text, nullable=True),
    Column("show_in_search", Boolean, nullable=False, server_default="true"),
    Column(
        "allow_invites_from",
        Enum(
            "everyone",
            "connections_only",
            "nobody",
            name="invite_policy",
            create_type=False,
        ),
        nullable=False,
        server_default="everyone",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_username", users_table.c.username)
Index("idx_users_name", users_table.c.name)

# ============================================================================
# WATCH LISTS TABLE
# ============================================================================
watch_lists_table = Table(
    "watch_lists",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "owner_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("name", String(100), nullable=False),
    Column(
        "type",
        Enum("custom", "partner", name="watch_list_type", create_type=False),
        nullable=False,
        server_default="custom",
    ),
    Column("is_shared", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_watch_lists_owner_id", watch_lists_table.c.owner_id)

# ============================================================================
# INVITES TABLE (friend, partner and list invites)
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "kind",
        Enum(
            "friend",
            "partner",
            "list_direct",
            "list_code",
            name="invite_kind",
            create_type=False,
        ),
        nullable=False,
    ),
    Column(
        "inviter_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "target_user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column(
        "target_list_id",
        UUID,
        ForeignKey("watch_lists.id", ondelete="CASCADE"),
        nullable=True,
    ),
    # Uniqueness key of the target: user:<id>, user:<id>/list:<id>, list:<id> or open
    Column("target_key", String(128), nullable=False),
    Column("code", String(64), nullable=True),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "declined",
            "cancelled",
            "expired",
            name="invite_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("resolved_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "accepted_by_user_id",
        BigInteger,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("metadata", JSONB, nullable=False, server_default="{}"),
    UniqueConstraint("code", name="uq_invites_code"),
    CheckConstraint(
        "target_user_id IS NULL OR target_user_id <> inviter_id",
        name="ck_invites_not_self",
    ),
)

Index("idx_invites_inviter_id", invites_table.c.inviter_id, invites_table.c.created_at)
Index(
    "idx_invites_target_user_status",
    invites_table.c.target_user_id,
    invites_table.c.status,
)

# Partial unique constraint: only one pending invite per (inviter, kind, target)
# Note: This is created in the migration with CREATE UNIQUE INDEX ... WHERE status = 'pending'
Index(
    "uq_invites_pending_target",
    invites_table.c.inviter_id,
    invites_table.c.kind,
    invites_table.c.target_key,
    unique=True,
    postgresql_where=invites_table.c.status == "pending",
)

# ============================================================================
# FRIENDSHIPS TABLE (unordered pair stored low/high)
# ============================================================================
friendships_table = Table(
    "friendships",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "user_low_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_high_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "invite_id", UUID, ForeignKey("invites.id", ondelete="SET NULL"), nullable=True
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_low_id", "user_high_id", name="uq_friendships_pair"),
    CheckConstraint("user_low_id < user_high_id", name="ck_friendships_ordered"),
)

Index("idx_friendships_user_high_id", friendships_table.c.user_high_id)

# ============================================================================
# PARTNERSHIPS TABLE (at most one partner per user)
# ============================================================================
partnerships_table = Table(
    "partnerships",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "user_low_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_high_id",
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "list_id",
        UUID,
        ForeignKey("watch_lists.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "invite_id", UUID, ForeignKey("invites.id", ondelete="SET NULL"), nullable=True
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_low_id", "user_high_id", name="uq_partnerships_pair"),
    CheckConstraint("user_low_id < user_high_id", name="ck_partnerships_ordered"),
)

# One row per partnered user; the primary key caps every user at one partner
partner_memberships_table = Table(
    "partner_memberships",
    metadata,
    Column(
        "user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "partnership_id",
        UUID,
        ForeignKey("partnerships.id", ondelete="CASCADE"),
        nullable=False,
    ),
)

# ============================================================================
# LIST COLLABORATORS TABLE
# ============================================================================
list_collaborators_table = Table(
    "list_collaborators",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "list_id",
        UUID,
        ForeignKey("watch_lists.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "access",
        Enum("co_owner", "editor", "viewer", name="access_level", create_type=False),
        nullable=False,
        server_default="editor",
    ),
    Column(
        "invite_id", UUID, ForeignKey("invites.id", ondelete="SET NULL"), nullable=True
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("list_id", "user_id", name="uq_list_collaborators_list_user"),
)

Index("idx_list_collaborators_user_id", list_collaborators_table.c.user_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "user_id", BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "type",
        Enum(
            "collab_invite",
            "collab_accepted",
            "collab_declined",
            "collab_ended",
            name="notification_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("title", String(255), nullable=False),
    Column("message", Text, nullable=True),
    Column("data", JSONB, nullable=False, server_default="{}"),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_user_created",
    notifications_table.c.user_id,
    notifications_table.c.created_at.desc(),
)
Index(
    "idx_notifications_user_unread",
    notifications_table.c.user_id,
    postgresql_where=notifications_table.c.is_read.is_(False),
)
