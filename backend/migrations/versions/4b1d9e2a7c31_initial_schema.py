"""initial schema: accounts, access tokens, page views

Revision ID: 4b1d9e2a7c31
Revises:
Create Date: 2024-06-01 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4b1d9e2a7c31'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_accounts'),
        sa.UniqueConstraint('email', name='uq_accounts_email'),
    )
    op.create_table(
        'access_tokens',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('token', sa.String(length=128), nullable=False),
        sa.Column('expiry', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], name='fk_access_tokens_account_id_accounts', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_access_tokens'),
        sa.UniqueConstraint('token', name='uq_access_tokens_token'),
    )
    op.create_index('ix_access_tokens_account_id', 'access_tokens', ['account_id'])
    op.create_table(
        'page_views',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('count', sa.Integer(), server_default='0', nullable=False),
        sa.CheckConstraint('count >= 0', name='ck_page_views_count_non_negative'),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], name='fk_page_views_account_id_accounts', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_page_views'),
        sa.UniqueConstraint('account_id', 'url', name='uq_page_views_account_id_url'),
    )
    op.create_table(
        'page_views_individual',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], name='fk_page_views_individual_account_id_accounts', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_page_views_individual'),
    )
    op.create_index(
        'ix_page_views_individual_account_url_created',
        'page_views_individual',
        ['account_id', 'url', 'created_at'],
    )


def downgrade():
    op.drop_index('ix_page_views_individual_account_url_created', table_name='page_views_individual')
    op.drop_table('page_views_individual')
    op.drop_table('page_views')
    op.drop_index('ix_access_tokens_account_id', table_name='access_tokens')
    op.drop_table('access_tokens')
    op.drop_table('accounts')
