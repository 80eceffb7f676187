"""Flask CLI commands for the trade journal."""

from __future__ import annotations

from pathlib import Path

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("journal-files")
    def journal_files() -> None:
        """List stored journal files, newest first."""

        from .extensions import get_workspace

        files = get_workspace().list_files()
        if not files:
            click.echo("No journal files found.")
            return
        for entry in files:
            click.echo(f"{entry.name}\t{entry.size}\t{entry.modified.isoformat()}")

    @app.cli.command("journal-summary")
    @click.argument("file_name")
    def journal_summary(file_name: str) -> None:
        """Print balances and regenerated summary rows for a journal file.

        FILE_NAME is a path, or the name of a file in the uploads directory.
        """

        from .errors import TradeJournalError
        from .extensions import get_workspace
        from .services import ledger_serializer, summary_rows

        workspace = get_workspace()
        path = Path(file_name)
        if not path.is_file():
            path = workspace.uploads_dir / file_name
        if not path.is_file():
            raise click.ClickException(f"File not found: {file_name}")

        try:
            ledger = ledger_serializer.decode(workspace.engine.read(path))
        except TradeJournalError as exc:
            raise click.ClickException(exc.message) from exc

        click.echo(f"Trades: {len(ledger.trades)}")
        click.echo(f"Crypto starting balance: {summary_rows.format_number(ledger.starting_balance_crypto)}")
        click.echo(f"Forex starting balance: {summary_rows.format_number(ledger.starting_balance_forex)}")
        for row in summary_rows.generate(
            ledger.trades, ledger.starting_balance_crypto, ledger.starting_balance_forex
        ):
            click.echo(f"{row['Type']}: {row['Notes']}")
