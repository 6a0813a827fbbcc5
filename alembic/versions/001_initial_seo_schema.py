"""Initial SEO schema: seo_pages, redirects, seo_audit_logs

Revision ID: 001_initial_seo_schema
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_initial_seo_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Per-page SEO overrides
    op.create_table(
        'seo_pages',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('site_id', sa.String(100), nullable=False),
        sa.Column('path', sa.Text(), nullable=False),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('meta_title', sa.Text(), nullable=False),
        sa.Column('meta_description', sa.Text(), nullable=False),
        sa.Column('robots', sa.String(200), nullable=False, server_default='index,follow'),
        sa.Column('page_category', sa.String(20), nullable=False),
        sa.Column('open_graph', postgresql.JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column('is_custom', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_by', sa.String(100), nullable=True),
        sa.Column('updated_by', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('length(trim(path)) > 0', name='chk_seo_page_path_not_empty'),
        sa.CheckConstraint('length(trim(slug)) > 0', name='chk_seo_page_slug_not_empty'),
        sa.UniqueConstraint('site_id', 'path', name='uniq_seo_page_path_per_site'),
        sa.UniqueConstraint('site_id', 'slug', name='uniq_seo_page_slug_per_site'),
    )
    op.create_index('idx_seo_pages_site_id', 'seo_pages', ['site_id'])

    # Redirect graph
    op.create_table(
        'redirects',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('site_id', sa.String(100), nullable=False),
        sa.Column('from_path', sa.Text(), nullable=False),
        sa.Column('to_path', sa.Text(), nullable=False),
        sa.Column('status_code', sa.Integer(), nullable=False, server_default='301'),
        sa.Column('created_by', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('status_code IN (301, 302, 307, 308)', name='chk_redirect_status_code'),
        sa.CheckConstraint('from_path <> to_path', name='chk_redirect_not_self'),
        sa.UniqueConstraint('site_id', 'from_path', name='uniq_redirect_from_per_site'),
    )
    op.create_index('idx_redirects_site_id', 'redirects', ['site_id'])
    op.create_index('idx_redirects_to_path', 'redirects', ['site_id', 'to_path'])

    # Append-only audit trail
    op.create_table(
        'seo_audit_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('site_id', sa.String(100), nullable=False),
        sa.Column('action', sa.String(30), nullable=False),
        sa.Column('entity_type', sa.String(20), nullable=False),
        sa.Column('path', sa.Text(), nullable=True),
        sa.Column('old_slug', sa.String(200), nullable=True),
        sa.Column('new_slug', sa.String(200), nullable=True),
        sa.Column('changes', postgresql.JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('metadata', postgresql.JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column('performed_by', sa.String(100), nullable=True),
        sa.Column('performed_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_seo_audit_logs_performed_at', 'seo_audit_logs', ['performed_at'])
    op.create_index('idx_seo_audit_logs_path', 'seo_audit_logs', ['path'])
    op.create_index('idx_seo_audit_logs_site_action', 'seo_audit_logs', ['site_id', 'action'])


def downgrade() -> None:
    op.drop_table('seo_audit_logs')
    op.drop_table('redirects')
    op.drop_table('seo_pages')
