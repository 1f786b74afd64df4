"""Create mail administration tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'mailuser',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('superuser', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_mailuser'),
        sa.UniqueConstraint('username', name='uq_mailuser_username'),
    )

    op.create_table(
        'maildomain',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner', sa.Integer(), nullable=False),
        sa.Column('domainname', sa.String(), nullable=False),
        sa.Column('remotemx', sa.String(), nullable=True),
        sa.Column('sender_verify', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('grey_listing', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('virus_check', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('spamcheck_threshold', sa.Integer(), server_default=sa.text('100'), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_maildomain'),
        sa.ForeignKeyConstraint(['owner'], ['mailuser.id'], ondelete='RESTRICT', name='fk_maildomain_owner_mailuser'),
        sa.UniqueConstraint('domainname', name='uq_maildomain_domainname'),
    )
    op.create_index('ix_maildomain_owner', 'maildomain', ['owner'])

    # Entries: the kind tag decides which of password/expansion may be set
    op.create_table(
        'mailentry',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('maildomain', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('kind', sa.Text(), nullable=False),
        sa.Column('password', sa.String(), nullable=True),
        sa.Column('expansion', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_mailentry'),
        sa.ForeignKeyConstraint(['maildomain'], ['maildomain.id'], ondelete='CASCADE', name='fk_mailentry_maildomain_maildomain'),
        sa.UniqueConstraint('maildomain', 'name', name='uq_mailentry_maildomain_name'),
        sa.CheckConstraint(
            "kind IN ('login', 'account', 'alias', 'list', 'bouncer', 'blackhole')",
            name='ck_mailentry_kind',
        ),
        sa.CheckConstraint(
            "(kind IN ('account', 'login') AND expansion IS NULL)"
            " OR (kind NOT IN ('account', 'login') AND password IS NULL)",
            name='ck_mailentry_kind_fields',
        ),
    )
    op.create_index('ix_mailentry_maildomain', 'mailentry', ['maildomain'])

    op.create_table(
        'mailauthtoken',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('mailuser', sa.Integer(), nullable=False),
        sa.Column('token', sa.String(), nullable=False),
        sa.Column('label', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_mailauthtoken'),
        sa.ForeignKeyConstraint(['mailuser'], ['mailuser.id'], ondelete='CASCADE', name='fk_mailauthtoken_mailuser_mailuser'),
        sa.UniqueConstraint('token', name='uq_mailauthtoken_token'),
    )
    op.create_index('ix_mailauthtoken_mailuser', 'mailauthtoken', ['mailuser'])

    op.create_table(
        'maildomainkey',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('maildomain', sa.Integer(), nullable=False),
        sa.Column('selector', sa.String(), nullable=False),
        sa.Column('privkey', sa.Text(), nullable=False),
        sa.Column('pubkey', sa.Text(), nullable=False),
        sa.Column('signing', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_maildomainkey'),
        sa.ForeignKeyConstraint(['maildomain'], ['maildomain.id'], ondelete='CASCADE', name='fk_maildomainkey_maildomain_maildomain'),
        sa.UniqueConstraint('maildomain', 'selector', name='uq_maildomainkey_maildomain_selector'),
    )
    op.create_index('ix_maildomainkey_maildomain', 'maildomainkey', ['maildomain'])

    # Maintained by the mail server tooling; read-only for the API
    op.create_table(
        'allowdenylist',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('maildomain', sa.Integer(), nullable=False),
        sa.Column('allow', sa.Boolean(), nullable=False),
        sa.Column('value', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_allowdenylist'),
        sa.ForeignKeyConstraint(['maildomain'], ['maildomain.id'], ondelete='CASCADE', name='fk_allowdenylist_maildomain_maildomain'),
    )
    op.create_index('ix_allowdenylist_maildomain', 'allowdenylist', ['maildomain'])


def downgrade():
    op.drop_table('allowdenylist')
    op.drop_table('maildomainkey')
    op.drop_table('mailauthtoken')
    op.drop_table('mailentry')
    op.drop_table('maildomain')
    op.drop_table('mailuser')
