"""
Main CLI entry point for filmcheck.

Provides the command-line interface using Click:

    filmcheck run          Run the acceptance scenarios against a service
    filmcheck query        Send one film query and show the result
    filmcheck db up        Start a seeded PostgreSQL instance until Ctrl-C
    filmcheck db seed-sql  Print the seed SQL
    filmcheck config show  Print the effective configuration
"""

import json as _json
import logging as _logging
import time as _time
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.logging as _rich_logging
import yaml as _yaml

import filmcheck
import filmcheck.cli.render as render
import filmcheck.client as client
import filmcheck.config as config
import filmcheck.fixture as fixture
import filmcheck.fixture.seed as seed
import filmcheck.scenarios as scenarios

CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

EXIT_FAILED = 1
"""At least one scenario failed."""

EXIT_SETUP_ERROR = 2
"""Configuration or fixture startup error."""


def _configure_logging(level: int) -> None:
    """Route log records to stderr through rich."""
    handler = _rich_logging.RichHandler(
        console=render.make_console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    _logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def _load_settings() -> config.Settings:
    try:
        return config.Settings()
    except (config.ConfigFileError, _pydantic.ValidationError) as e:
        _click.echo(f"Configuration error: {e}", err=True)
        raise SystemExit(EXIT_SETUP_ERROR) from None


def _make_client(settings: config.Settings, base_url: str | None) -> client.FilmApiClient:
    """Build the HTTP client for the configured (or overridden) service."""
    return client.FilmApiClient(
        base_url or settings.base_url,
        api_path=settings.service.api_path,
        timeout=settings.service.timeout,
    )


def _make_fixture(settings: config.Settings) -> fixture.PostgresFixture:
    return fixture.PostgresFixture(settings.database)


def _wait_for_interrupt() -> None:
    """Block until Ctrl-C."""
    try:
        while True:
            _time.sleep(1)
    except KeyboardInterrupt:
        pass


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(filmcheck.__version__, "-v", "--version", prog_name="filmcheck")
@_click.option("--verbose", is_flag=True, help="Enable debug logging")
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """filmcheck - acceptance harness for the Film Query API."""
    settings = _load_settings()
    _configure_logging(_logging.DEBUG if verbose else settings.log_level)
    ctx.obj = {"settings": settings}


@cli.command()
@_click.option("--base-url", type=str, default=None, help="Service base URL (overrides config)")
@_click.option(
    "--with-db/--no-db",
    default=False,
    help="Start a seeded PostgreSQL fixture for the run and check it",
)
@_click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@_click.pass_context
def run(
    ctx: _click.Context,
    base_url: str | None,
    with_db: bool,
    json_output: bool,
) -> None:
    """Run all acceptance scenarios against a running service."""
    settings: config.Settings = ctx.obj["settings"]

    with _make_client(settings, base_url) as api_client:
        if with_db:
            db = _make_fixture(settings)
            try:
                db.start()
            except fixture.FixtureStartupError as e:
                _click.echo(f"Database fixture failed to start: {e}", err=True)
                ctx.exit(EXIT_SETUP_ERROR)
            try:
                results = scenarios.run_all(api_client, settings, db)
            finally:
                db.stop()
        else:
            results = scenarios.run_all(api_client, settings)

    if json_output:
        _click.echo(render.results_to_json(results))
    else:
        render.render_results(render.make_console(), results)

    if not all(result.passed for result in results):
        ctx.exit(EXIT_FAILED)


@cli.command()
@_click.argument("starts_with")
@_click.option("--base-url", type=str, default=None, help="Service base URL (overrides config)")
@_click.option("--json", "json_output", is_flag=True, help="Output the raw response as JSON")
@_click.pass_context
def query(
    ctx: _click.Context,
    starts_with: str,
    base_url: str | None,
    json_output: bool,
) -> None:
    """Send one query with STARTS_WITH passed verbatim (use "" for empty)."""
    settings: config.Settings = ctx.obj["settings"]

    with _make_client(settings, base_url) as api_client:
        try:
            response = api_client.query_films(starts_with)
        except client.ServiceConnectionError as e:
            _click.echo(str(e), err=True)
            ctx.exit(EXIT_FAILED)

    if json_output:
        _click.echo(render.query_to_json(response))
    else:
        render.render_query(render.make_console(), starts_with, response)


@cli.group(name="db")
def db_cmd() -> None:
    """Manage the PostgreSQL fixture."""


@db_cmd.command(name="up")
@_click.pass_context
def db_up(ctx: _click.Context) -> None:
    """Start a seeded database and keep it running until Ctrl-C."""
    settings: config.Settings = ctx.obj["settings"]
    db = _make_fixture(settings)
    try:
        db.start()
    except fixture.FixtureStartupError as e:
        _click.echo(f"Database fixture failed to start: {e}", err=True)
        ctx.exit(EXIT_SETUP_ERROR)

    try:
        _click.echo(f"Container: {db.container_name}")
        _click.echo(f"Connection URI: {db.connection_uri}")
        for name, value in db.service_environment().items():
            _click.echo(f"export {name}={value}")
        _click.echo("Press Ctrl-C to stop.", err=True)
        _wait_for_interrupt()
    finally:
        db.stop()


@db_cmd.command(name="seed-sql")
@_click.pass_context
def db_seed_sql(ctx: _click.Context) -> None:
    """Print the SQL used to seed the database."""
    settings: config.Settings = ctx.obj["settings"]
    _click.echo(seed.load_seed_sql(settings.database), nl=False)


@cli.group(name="config")
def config_cmd() -> None:
    """Inspect configuration."""


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def config_show(ctx: _click.Context, as_json: bool) -> None:
    """Print the effective configuration."""
    settings: config.Settings = ctx.obj["settings"]

    for path, value in settings.get_unknown_fields().items():
        _click.echo(f"warning: unknown config key {path} = {value!r}", err=True)

    data = settings.to_dict()
    if as_json:
        _click.echo(_json.dumps(data, indent=2))
    else:
        _click.echo(_yaml.safe_dump(data, sort_keys=False), nl=False)


def main() -> None:
    """Main entry point."""
    cli(prog_name="filmcheck")


if __name__ == "__main__":
    main()
