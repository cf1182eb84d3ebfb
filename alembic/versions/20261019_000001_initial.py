"""Create seasons, athletes, meets and athletes_to_meets.

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from alembic import op  # type: ignore[attr-defined]
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None


def _identity_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "seasons",
        *_identity_columns(),
        sa.Column("start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "athletes",
        *_identity_columns(),
        sa.Column("name", sa.String(), nullable=False),
    )
    op.create_index("ix_athletes_name", "athletes", ["name"], unique=False)

    op.create_table(
        "meets",
        *_identity_columns(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(), nullable=False),
        sa.Column("num_teams", sa.Integer(), nullable=False),
        sa.Column(
            "season",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("seasons.id"),
            nullable=False,
        ),
    )
    op.create_index("ix_meets_season", "meets", ["season"], unique=False)

    op.create_table(
        "athletes_to_meets",
        *_identity_columns(),
        sa.Column(
            "athlete",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("athletes.id"),
            nullable=False,
        ),
        sa.Column(
            "meet",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("meets.id"),
            nullable=False,
        ),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("details", postgresql.JSONB(), nullable=False),
    )
    op.create_index(
        "ix_athletes_to_meets_athlete", "athletes_to_meets", ["athlete"], unique=False
    )
    op.create_index(
        "ix_athletes_to_meets_meet", "athletes_to_meets", ["meet"], unique=False
    )


def downgrade() -> None:
    op.drop_table("athletes_to_meets")
    op.drop_table("meets")
    op.drop_table("athletes")
    op.drop_table("seasons")
