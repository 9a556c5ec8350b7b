"""add favorite, rating and public flags to recipes

Revision ID: 8b4e0d6c5a21
Revises: 3f1c9a2b7d10
Create Date: 2026-09-20 18:47:02.530971

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8b4e0d6c5a21"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    with op.batch_alter_table("recipes") as batch_op:
        batch_op.add_column(sa.Column("rating", sa.Integer(), nullable=True))
        batch_op.add_column(
            sa.Column("is_favorite", sa.Boolean(), nullable=False, server_default=sa.false())
        )
        batch_op.add_column(
            sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false())
        )
    op.create_index("ix_recipes_owner_favorite", "recipes", ["owner_id", "is_favorite"], unique=False)
    op.create_index("ix_recipes_owner_rating", "recipes", ["owner_id", "rating"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_recipes_owner_rating", table_name="recipes")
    op.drop_index("ix_recipes_owner_favorite", table_name="recipes")
    with op.batch_alter_table("recipes") as batch_op:
        batch_op.drop_column("is_public")
        batch_op.drop_column("is_favorite")
        batch_op.drop_column("rating")
