"""Alembic command shortcuts for project scripts."""

import sys

from alembic import command
from alembic.config import Config

from cinema_booking.platform.constant.path import ALEMBIC_DIR, BASE_DIR


def _config() -> Config:
    config = Config(str(BASE_DIR / 'alembic.ini'))
    config.set_main_option('script_location', str(ALEMBIC_DIR))
    return config


def upgrade() -> None:
    """Upgrade database to latest migration."""
    command.upgrade(_config(), 'head')


def downgrade() -> None:
    """Downgrade database by one migration."""
    command.downgrade(_config(), '-1')


def make_migration() -> None:
    """Create a new migration based on model changes."""
    if len(sys.argv) < 2:
        sys.exit("Usage: make-migration 'migration message'")
    command.revision(_config(), message=' '.join(sys.argv[1:]), autogenerate=True)
