"""
Rich output for CLI results.
"""

import json as _json
import typing as _typing

import rich.console as _rich_console
import rich.table as _rich_table
import rich.text as _rich_text

import filmcheck.client.types as client_types
import filmcheck.scenarios as scenarios


def make_console(*, stderr: bool = False, no_color: bool = False) -> _rich_console.Console:
    return _rich_console.Console(stderr=stderr, no_color=no_color, highlight=False)


def render_results(
    console: _rich_console.Console,
    results: list[scenarios.ScenarioResult],
) -> None:
    """Print a table of scenario outcomes followed by each failure."""
    table = _rich_table.Table(title="Film Query API acceptance")
    table.add_column("Scenario")
    table.add_column("Result")
    table.add_column("Time", justify="right")

    for result in results:
        if result.passed:
            status = _rich_text.Text("PASS", style="bold green")
        elif result.error:
            status = _rich_text.Text("ERROR", style="bold red")
        else:
            status = _rich_text.Text("FAIL", style="bold red")
        table.add_row(result.name, status, f"{result.duration_ms:.0f} ms")

    console.print(table)

    for result in results:
        if result.passed:
            continue
        console.print(_rich_text.Text(f"\n{result.name}", style="bold"))
        for failure in result.failures:
            console.print(f"  - {failure}", markup=False)

    passed = sum(1 for result in results if result.passed)
    style = "green" if passed == len(results) else "red"
    console.print(
        _rich_text.Text(f"\n{passed}/{len(results)} scenarios passed", style=style)
    )


def results_to_json(results: list[scenarios.ScenarioResult]) -> str:
    return _json.dumps(
        {
            "passed": all(result.passed for result in results),
            "scenarios": [result.to_dict() for result in results],
        },
        indent=2,
    )


def render_query(
    console: _rich_console.Console,
    starts_with: str,
    response: client_types.ClientResponse,
) -> None:
    """Print the status line and, for JSON bodies, the films returned."""
    console.print(
        f"GET {response.url} -> {response.status_code} ({response.elapsed_ms:.0f} ms)",
        markup=False,
    )
    body = response.body
    if not isinstance(body, dict):
        console.print("(no JSON body)")
        return

    films = body.get("films")
    if not isinstance(films, list):
        console.print_json(data=body)
        return

    table = _rich_table.Table(title=f"startsWith={starts_with!r}: {body.get('count')} film(s)")
    table.add_column("film_id", justify="right")
    table.add_column("title")
    for film in films:
        film_dict: dict[str, _typing.Any] = film if isinstance(film, dict) else {}
        table.add_row(str(film_dict.get("film_id")), str(film_dict.get("title")))
    console.print(table)


def query_to_json(response: client_types.ClientResponse) -> str:
    return _json.dumps(
        {
            "url": response.url,
            "status_code": response.status_code,
            "elapsed_ms": round(response.elapsed_ms, 1),
            "body": response.body,
        },
        indent=2,
    )
