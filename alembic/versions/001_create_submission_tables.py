"""Create submission tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the guardian, teacher and student submission tables.
How:   IF NOT EXISTS on every table, so databases that were initialized by
       `python -m school_survey.scripts.init_db` upgrade cleanly.

Rollback: downgrade() drops all three tables (all answers are lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RATINGS = postgresql.JSONB()
LABELS = postgresql.ARRAY(sa.Text())


def _identity_columns():
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=False),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "acudientes_form_submissions",
        *_identity_columns(),
        sa.Column("institucion_educativa", sa.Text(), nullable=False),
        sa.Column("grados_estudiantes", LABELS, nullable=False),
        sa.Column("comunicacion", RATINGS, nullable=False),
        sa.Column("practicas_pedagogicas", RATINGS, nullable=False),
        sa.Column("convivencia", RATINGS, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        if_not_exists=True,
    )

    op.create_table(
        "docentes_form_submissions",
        *_identity_columns(),
        sa.Column("institucion_educativa", sa.String(255), nullable=False),
        sa.Column("anos_como_docente", sa.String(50), nullable=False),
        sa.Column("grados_asignados", LABELS, nullable=False),
        sa.Column("jornada", sa.String(50), nullable=False),
        sa.Column("retroalimentacion_de", LABELS, nullable=False),
        sa.Column("frequency_ratings6", RATINGS, nullable=False),
        sa.Column("frequency_ratings7", RATINGS, nullable=False),
        sa.Column("frequency_ratings8", RATINGS, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        if_not_exists=True,
    )

    op.create_table(
        "estudiantes_form_submissions",
        *_identity_columns(),
        sa.Column("institucion_educativa", sa.Text(), nullable=False),
        sa.Column("anos_estudiando", sa.Text(), nullable=False),
        sa.Column("grado_actual", sa.Text(), nullable=False),
        sa.Column("jornada", sa.Text(), nullable=False),
        sa.Column("frequency_ratings5", RATINGS, nullable=False),
        sa.Column("frequency_ratings6", RATINGS, nullable=False),
        sa.Column("frequency_ratings7", RATINGS, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        if_not_exists=True,
    )


def downgrade() -> None:
    op.drop_table("estudiantes_form_submissions", if_exists=True)
    op.drop_table("docentes_form_submissions", if_exists=True)
    op.drop_table("acudientes_form_submissions", if_exists=True)
