"""create users, flashcards and statistics tables

Revision ID: 3c9a1e7d5b20
Revises:
Create Date: 2025-05-12 10:21:43.118902

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c9a1e7d5b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


flashcard_source = sa.Enum("AI", "AI_EDITED", "MANUAL", name="flashcard_source")


def upgrade() -> None:
    """Create the users table (fastapi-users layout), flashcards and statistics."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=1024), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_superuser", sa.Boolean(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)

    op.create_table(
        "flashcards",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("front", sa.String(length=200), nullable=False),
        sa.Column("back", sa.String(length=500), nullable=False),
        sa.Column("source", flashcard_source, nullable=False),
        sa.Column("candidate", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_flashcards_id"), "flashcards", ["id"], unique=False)
    op.create_index(
        op.f("ix_flashcards_user_id"), "flashcards", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_flashcards_candidate"), "flashcards", ["candidate"], unique=False
    )
    op.create_index(
        op.f("ix_flashcards_created_at"), "flashcards", ["created_at"], unique=False
    )
    op.create_index(
        op.f("ix_flashcards_updated_at"), "flashcards", ["updated_at"], unique=False
    )

    op.create_table(
        "statistics",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("generated_count", sa.Integer(), nullable=False),
        sa.Column("accepted_edited_count", sa.Integer(), nullable=False),
        sa.Column("accepted_unedited_count", sa.Integer(), nullable=False),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_statistics_id"), "statistics", ["id"], unique=False)
    op.create_index(
        op.f("ix_statistics_user_id"), "statistics", ["user_id"], unique=True
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_statistics_user_id"), table_name="statistics")
    op.drop_index(op.f("ix_statistics_id"), table_name="statistics")
    op.drop_table("statistics")

    op.drop_index(op.f("ix_flashcards_updated_at"), table_name="flashcards")
    op.drop_index(op.f("ix_flashcards_created_at"), table_name="flashcards")
    op.drop_index(op.f("ix_flashcards_candidate"), table_name="flashcards")
    op.drop_index(op.f("ix_flashcards_user_id"), table_name="flashcards")
    op.drop_index(op.f("ix_flashcards_id"), table_name="flashcards")
    op.drop_table("flashcards")
    flashcard_source.drop(op.get_bind(), checkfirst=True)

    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
