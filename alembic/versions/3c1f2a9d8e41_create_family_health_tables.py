"""create family health tables

Revision ID: 3c1f2a9d8e41
Revises:
Create Date: 2026-10-18 10:12:40.315208

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision = '3c1f2a9d8e41'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'family',
        sa.Column('family_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'member',
        sa.Column('member_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('verify_id', sa.String(100), nullable=False, unique=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('family_id', UUID(as_uuid=True), sa.ForeignKey('family.family_id', ondelete='SET NULL')),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'calendar_event',
        sa.Column('event_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('member_id', UUID(as_uuid=True), sa.ForeignKey('member.member_id', ondelete='CASCADE'), nullable=False),
        sa.Column('event_type', sa.String(20), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
    )
    op.create_table(
        'medication_management',
        sa.Column('medication_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('event_id', UUID(as_uuid=True), sa.ForeignKey('calendar_event.event_id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('member_id', UUID(as_uuid=True), sa.ForeignKey('member.member_id', ondelete='CASCADE'), nullable=False),
        sa.Column('disease_name', sa.String(255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_medication_management_member_id', 'medication_management', ['member_id'])
    op.create_table(
        'medication_drug',
        sa.Column('drug_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('medication_id', UUID(as_uuid=True), sa.ForeignKey('medication_management.medication_id', ondelete='CASCADE'), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('drug_name', sa.String(255), nullable=False),
        sa.Column('dosage', sa.String(255), nullable=False),
    )
    op.create_table(
        'medication_timing',
        sa.Column('timing_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('medication_id', UUID(as_uuid=True), sa.ForeignKey('medication_management.medication_id', ondelete='CASCADE'), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('timing_type', sa.String(20), nullable=False),
        sa.Column('precaution', sa.Text()),
    )
    op.create_table(
        'medical_result',
        sa.Column('medical_result_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('event_id', UUID(as_uuid=True), sa.ForeignKey('calendar_event.event_id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('member_id', UUID(as_uuid=True), sa.ForeignKey('member.member_id', ondelete='CASCADE'), nullable=False),
        sa.Column('hospital_name', sa.String(255), nullable=False),
        sa.Column('doctor_name', sa.String(255)),
        sa.Column('diagnosis', sa.Text(), nullable=False),
        sa.Column('treatment', sa.Text()),
        sa.Column('memo', sa.Text()),
        sa.Column('visit_date', sa.Date(), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table('medical_result')
    op.drop_table('medication_timing')
    op.drop_table('medication_drug')
    op.drop_index('ix_medication_management_member_id', table_name='medication_management')
    op.drop_table('medication_management')
    op.drop_table('calendar_event')
    op.drop_table('member')
    op.drop_table('family')
