"""baseline marketplace schema

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Users, services, categories, skills, messaging, transactions, reviews,
achievements and the activity log. UUID primary keys throughout.
"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_baseline"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(*, updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)
        )
    return columns


def _user_fk(name: str, ondelete: str = "CASCADE") -> sa.Column:
    return sa.Column(
        name,
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete=ondelete),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("wallet_address", sa.String(100), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("is_freelancer", sa.Boolean(), nullable=False),
        sa.Column(
            "role",
            sa.Enum(
                "user", "moderator", "admin", name="user_role", native_enum=False
            ),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("two_factor_enabled", sa.Boolean(), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("wallet_address", name="uq_users_wallet_address"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "services",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("freelancer_id"),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("base_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("delivery_time_days", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_services_freelancer_id", "services", ["freelancer_id"])
    op.create_index(
        "ix_services_freelancer_active", "services", ["freelancer_id", "is_active"]
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )

    op.create_table(
        "service_categories",
        sa.Column(
            "service_id",
            sa.Uuid(),
            sa.ForeignKey("services.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "category_id",
            sa.Uuid(),
            sa.ForeignKey("categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("service_id", "category_id"),
    )

    op.create_table(
        "skills",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_skills_name"),
    )

    op.create_table(
        "freelancer_skills",
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "skill_id",
            sa.Uuid(),
            sa.ForeignKey("skills.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "experience_level",
            sa.Enum(
                "beginner",
                "intermediate",
                "expert",
                name="experience_level",
                native_enum=False,
            ),
            nullable=False,
        ),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("user_id", "skill_id"),
    )

    op.create_table(
        "conversations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("last_message_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "conversation_participants",
        sa.Column(
            "conversation_id",
            sa.Uuid(),
            sa.ForeignKey("conversations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("conversation_id", "user_id"),
    )

    op.create_table(
        "messages",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "conversation_id",
            sa.Uuid(),
            sa.ForeignKey("conversations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk("sender_id"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_sender_id", "messages", ["sender_id"])
    op.create_index(
        "ix_messages_conversation_created",
        "messages",
        ["conversation_id", "created_at"],
    )

    op.create_table(
        "transactions",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("from_user_id", ondelete="RESTRICT"),
        _user_fk("to_user_id", ondelete="RESTRICT"),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("amount", sa.Numeric(18, 6), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False),
        sa.Column("transaction_hash", sa.String(128), nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "pending",
                "completed",
                "failed",
                "cancelled",
                name="transaction_status",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column(
            "type",
            sa.Enum(
                "payment",
                "escrow_deposit",
                "escrow_release",
                "refund",
                name="transaction_type",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "transaction_hash", name="uq_transactions_transaction_hash"
        ),
    )
    op.create_index("ix_transactions_from_user_id", "transactions", ["from_user_id"])
    op.create_index("ix_transactions_to_user_id", "transactions", ["to_user_id"])
    op.create_index("ix_transactions_status", "transactions", ["status"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("from_user_id"),
        _user_fk("to_user_id"),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "from_user_id", "to_user_id", "project_id", name="uq_review_per_project"
        ),
        sa.CheckConstraint("score BETWEEN 1 AND 5", name="ck_reviews_score_range"),
    )
    op.create_index("ix_reviews_from_user_id", "reviews", ["from_user_id"])
    op.create_index("ix_reviews_to_user_id", "reviews", ["to_user_id"])

    op.create_table(
        "achievements",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_achievements_name"),
    )

    op.create_table(
        "user_achievements",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("user_id"),
        sa.Column(
            "achievement_id",
            sa.Uuid(),
            sa.ForeignKey("achievements.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("nft_token_id", sa.String(255), nullable=True),
        sa.Column("earned_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),
    )
    op.create_index("ix_user_achievements_user_id", "user_achievements", ["user_id"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        _user_fk("user_id"),
        sa.Column("action_type", sa.String(50), nullable=False),
        sa.Column("entity_type", sa.String(50), nullable=True),
        sa.Column("entity_id", sa.String(100), nullable=True),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("ip_address", sa.String(45), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_logs_user_id", "activity_logs", ["user_id"])
    op.create_index(
        "ix_activity_logs_user_action", "activity_logs", ["user_id", "action_type"]
    )


def downgrade() -> None:
    op.drop_table("activity_logs")
    op.drop_table("user_achievements")
    op.drop_table("achievements")
    op.drop_table("reviews")
    op.drop_table("transactions")
    op.drop_table("messages")
    op.drop_table("conversation_participants")
    op.drop_table("conversations")
    op.drop_table("freelancer_skills")
    op.drop_table("skills")
    op.drop_table("service_categories")
    op.drop_table("categories")
    op.drop_table("services")
    op.drop_table("users")
