"""initial schema: accounts, profiles, catalog, gigs, ratings

Revision ID: 0001
Revises:
Create Date: 2025-01-01 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = postgresql.ENUM(
    "client", "service_provider", "admin", "super_admin", name="user_role", create_type=False
)
verification_status = postgresql.ENUM(
    "pending", "approved", "rejected", name="verification_status", create_type=False
)
gig_status = postgresql.ENUM(
    "open", "allocated", "in_progress", "completed", "cancelled", name="gig_status", create_type=False
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    for enum_type in (user_role, verification_status, gig_status):
        enum_type.create(bind, checkfirst=True)

    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_accounts"),
        sa.UniqueConstraint("username", name="uq_accounts_username"),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )

    op.create_table(
        "gig_categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_gig_categories"),
        sa.UniqueConstraint("name", name="uq_gig_categories_name"),
    )

    op.create_table(
        "locations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_locations"),
        sa.UniqueConstraint("name", name="uq_locations_name"),
    )

    op.create_table(
        "client_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column("contact_name", sa.String(length=150), nullable=False),
        sa.Column("company_name", sa.String(length=150), nullable=True),
        sa.Column("location", sa.String(length=150), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("verification_status", verification_status, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["account_id"], ["accounts.id"],
            name="fk_client_profiles_account_id_accounts", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_client_profiles"),
        sa.UniqueConstraint("account_id", name="uq_client_profiles_account_id"),
    )

    op.create_table(
        "provider_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column("full_name", sa.String(length=150), nullable=False),
        sa.Column("location", sa.String(length=150), nullable=False),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("experience", sa.Text(), nullable=True),
        sa.Column("availability", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("verification_status", verification_status, nullable=False),
        sa.Column("avg_rating", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["account_id"], ["accounts.id"],
            name="fk_provider_profiles_account_id_accounts", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_provider_profiles"),
        sa.UniqueConstraint("account_id", name="uq_provider_profiles_account_id"),
    )

    op.create_table(
        "gigs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("location_id", sa.Uuid(), nullable=False),
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("provider_id", sa.Uuid(), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", gig_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ["category_id"], ["gig_categories.id"], name="fk_gigs_category_id_gig_categories"
        ),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], name="fk_gigs_location_id_locations"),
        sa.ForeignKeyConstraint(["client_id"], ["accounts.id"], name="fk_gigs_client_id_accounts"),
        sa.ForeignKeyConstraint(["provider_id"], ["accounts.id"], name="fk_gigs_provider_id_accounts"),
        sa.PrimaryKeyConstraint("id", name="pk_gigs"),
    )
    op.create_index("ix_gigs_status", "gigs", ["status"])
    op.create_index("ix_gigs_client_id", "gigs", ["client_id"])
    op.create_index("ix_gigs_provider_id", "gigs", ["provider_id"])

    op.create_table(
        "ratings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("review", sa.Text(), nullable=True),
        sa.Column("gig_id", sa.Uuid(), nullable=False),
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("provider_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint("score >= 1 AND score <= 5", name="ck_ratings_score_range"),
        sa.ForeignKeyConstraint(
            ["gig_id"], ["gigs.id"], name="fk_ratings_gig_id_gigs", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["client_id"], ["accounts.id"], name="fk_ratings_client_id_accounts"),
        sa.ForeignKeyConstraint(["provider_id"], ["accounts.id"], name="fk_ratings_provider_id_accounts"),
        sa.PrimaryKeyConstraint("id", name="pk_ratings"),
        sa.UniqueConstraint("gig_id", name="uq_ratings_gig_id"),
    )
    op.create_index("ix_ratings_provider_id", "ratings", ["provider_id"])


def downgrade() -> None:
    op.drop_index("ix_ratings_provider_id", table_name="ratings")
    op.drop_table("ratings")
    op.drop_index("ix_gigs_provider_id", table_name="gigs")
    op.drop_index("ix_gigs_client_id", table_name="gigs")
    op.drop_index("ix_gigs_status", table_name="gigs")
    op.drop_table("gigs")
    op.drop_table("provider_profiles")
    op.drop_table("client_profiles")
    op.drop_table("locations")
    op.drop_table("gig_categories")
    op.drop_table("accounts")
    gig_status.drop(op.get_bind(), checkfirst=True)
    verification_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
