"""Add service_requests table; make services.description optional.

Clients ask a freelancer to take on a service through a service request,
answered once with accepted or rejected. A service can now be published
with just a title, price and delivery time.

Revision ID: 0002_service_requests
Revises: 0001_baseline
Create Date: 2026-10-19
"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0002_service_requests"
down_revision = "0001_baseline"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.alter_column(
        "services", "description", existing_type=sa.Text(), nullable=True
    )

    op.create_table(
        "service_requests",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "service_id",
            sa.Uuid(),
            sa.ForeignKey("services.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "client_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "pending",
                "accepted",
                "rejected",
                name="service_request_status",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_service_requests_client_id", "service_requests", ["client_id"]
    )
    op.create_index(
        "ix_service_requests_service_client_status",
        "service_requests",
        ["service_id", "client_id", "status"],
    )


def downgrade() -> None:
    op.drop_table("service_requests")
    op.execute("UPDATE services SET description = '' WHERE description IS NULL")
    op.alter_column(
        "services", "description", existing_type=sa.Text(), nullable=False
    )
