"""Create the users table."""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f6c1d2a9b7e"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create users with a unique index on email."""

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)


def downgrade() -> None:
    """Drop the users table."""

    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
