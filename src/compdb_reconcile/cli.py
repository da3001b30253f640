import time

import click

from compdb_reconcile import database
from compdb_reconcile.reconcile import RETENTION_SECONDS, reconcile_with_stats

DEFAULT_RETENTION_DAYS = RETENTION_SECONDS // (24 * 3600)


@click.command()
@click.argument("database_path", metavar="DATABASE",
                type=click.Path(dir_okay=False))
@click.option("--retention-days", default=DEFAULT_RETENTION_DAYS,
              type=click.IntRange(min=0), show_default=True,
              help="Drop commands recorded longer ago than this.")
@click.option("--dry-run", is_flag=True,
              help="Reconcile and report without rewriting the database.")
@click.option("--verbose", "-v", is_flag=True)
def main(database_path, retention_days, dry_run, verbose):
    """Prune stale entries from DATABASE and add entries for headers."""
    now = time.time()
    try:
        commands = database.read(database_path, now=now)
    except (OSError, database.DatabaseFormatError) as e:
        raise click.ClickException(f"Failed to load {database_path}: {e}")

    result, stats = reconcile_with_stats(
        commands, now, retention=retention_days * 24 * 3600)

    if verbose:
        for path in stats.headers:
            click.echo(f"[infer] {path}", err=True)
        click.echo(
            f"Loaded {stats.loaded}, expired {stats.expired}, "
            f"inferred {stats.inferred}, dropped {stats.missing} missing, "
            f"kept {stats.written}", err=True)

    if dry_run:
        return

    try:
        database.write(database_path, result)
    except OSError as e:
        raise click.ClickException(f"Failed to write {database_path}: {e}")

    if verbose:
        click.echo(f"Wrote {database_path}", err=True)
