"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

SPECIALTIES = (
    'odontology',
    'orthodontics',
    'endodontics',
    'periodontics',
    'pediatric_dentistry',
    'oral_surgery',
    'general_medicine',
)


def upgrade() -> None:
    # Create patients table
    op.create_table(
        'patients',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('doctor_id', sa.String(), nullable=False),
        sa.Column('specialty', sa.Enum(*SPECIALTIES, name='specialty'), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('document_id', sa.Text(), nullable=False, server_default=''),
        sa.Column('phone', sa.Text(), nullable=False, server_default=''),
        sa.Column('email', sa.Text(), nullable=False, server_default=''),
        sa.Column('birth_date', sa.Text(), nullable=False, server_default=''),
        sa.Column('medical_backgrounds', sa.JSON(), nullable=False),
        sa.Column('image_keys', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_patients_doctor_id', 'patients', ['doctor_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_patients_doctor_id', table_name='patients')
    op.drop_table('patients')
    sa.Enum(name='specialty').drop(op.get_bind(), checkfirst=True)
