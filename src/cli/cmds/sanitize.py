#!/usr/bin/env python3
"""
WordPress Database Sanitizer CLI.

Replaces personal and sensitive data in a copy of a WordPress database so it
can be handed to developers, staging environments or contractors. Every
command is destructive and irreversible; each asks for confirmation unless
--yes is given.

Usage:
    wp-sanitize db                      # everything, one confirmation
    wp-sanitize users --preserve-domain example-agency.com
    wp-sanitize --config config.yaml woocommerce --yes
"""

import sys
import click
from sqlalchemy.exc import SQLAlchemyError

from cli.core.context import Context
from cli.core.utils import EXIT_CONFIG
from cli.sanitize.commands import SanitizeDatabaseCommand, SanitizeStageCommand
from sanitize_db.config import SanitizeConfig
from sanitize_db.exceptions import ConfigError
from sanitize_db.logging_utils import setup_logging
from sanitize_db.session import create_sanitize_engine


pass_context = click.make_pass_decorator(Context, ensure=True)
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])

yes_option = click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--config', 'config_file', type=click.Path(dir_okay=False), help='YAML config file')
@click.option('--database-url', help='SQLAlchemy URL of the database to sanitize')
@click.option('--batch-size', type=int, help='Rows per batch (default: 1000)')
@click.option('--seed', type=int, help='Seed for reproducible fake data')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Also log to this (rotating) file')
@click.option('--log-sql', is_flag=True, help='Log every SQL statement')
@click.option('--verbose', '-v', is_flag=True, help='Show detailed information')
@pass_context
def cli(ctx: Context, config_file, database_url, batch_size, seed, log_file, log_sql, verbose):
    """Sanitize sensitive data in a WordPress database"""
    ctx.verbose = verbose
    setup_logging(log_file=log_file, verbose=verbose, log_sql=log_sql)

    try:
        ctx.config = SanitizeConfig(
            config_file, database_url=database_url, batch_size=batch_size, seed=seed
        )
        url = ctx.config.require_database_url()
    except ConfigError as e:
        ctx.stderr_console.print(f"Configuration error: {e}", style="bold red")
        sys.exit(EXIT_CONFIG)

    # Initialize database connection
    try:
        ctx.engine, SessionLocal = create_sanitize_engine(url, require_ssl=ctx.config.require_ssl)
        ctx.session = SessionLocal()
        click.get_current_context().call_on_close(ctx.session.close)
    except (SQLAlchemyError, ImportError) as e:
        ctx.stderr_console.print(f"Error connecting to database: {e}", style="bold red")
        sys.exit(EXIT_CONFIG)


def _preserve(ctx: Context, domains):
    if domains:
        ctx.config.preserve_email_domains = list(domains)


@cli.command()
@yes_option
@click.option('--preserve-domain', '-p', multiple=True,
              help='Leave accounts with emails at this domain untouched (repeatable)')
@pass_context
def db(ctx: Context, yes, preserve_domain):
    """Sanitize all sensitive data (runs every command below)."""
    _preserve(ctx, preserve_domain)
    sys.exit(SanitizeDatabaseCommand(ctx).execute(yes=yes))


@cli.command()
@yes_option
@pass_context
def transients(ctx: Context, yes):
    """Delete all transients."""
    sys.exit(SanitizeStageCommand(ctx).execute('transients', yes=yes))


@cli.command()
@yes_option
@pass_context
def comments(ctx: Context, yes):
    """Sanitize non-public comments."""
    sys.exit(SanitizeStageCommand(ctx).execute('comments', yes=yes))


@cli.command()
@yes_option
@click.option('--preserve-domain', '-p', multiple=True,
              help='Leave accounts with emails at this domain untouched (repeatable)')
@pass_context
def users(ctx: Context, yes, preserve_domain):
    """Sanitize user accounts and user attributes."""
    _preserve(ctx, preserve_domain)
    sys.exit(SanitizeStageCommand(ctx).execute('users', yes=yes))


@cli.command()
@yes_option
@click.option('--force', is_flag=True, help='Run even if Gravity Forms is not detected')
@pass_context
def gravityforms(ctx: Context, yes, force):
    """Empty the Gravity Forms entry tables."""
    sys.exit(SanitizeStageCommand(ctx).execute('gravityforms', yes=yes, force=force))


@cli.command()
@yes_option
@click.option('--force', is_flag=True, help='Run even if WooCommerce is not detected')
@pass_context
def woocommerce(ctx: Context, yes, force):
    """Sanitize WooCommerce billing, shipping and payment data."""
    sys.exit(SanitizeStageCommand(ctx).execute('woocommerce', yes=yes, force=force))


if __name__ == '__main__':
    cli()
