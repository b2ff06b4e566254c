"""
Fixture data for the `film` table.

The rows are the first 51 films of the Sakila sample catalogue: 46 titles
starting with "A" followed by five starting with "B". No title starts
with "X".
"""

from __future__ import annotations

import pathlib as _pathlib

import filmcheck.config.types as config_types

FILM_TITLES: tuple[str, ...] = (
    "ACADEMY DINOSAUR",
    "ACE GOLDFINGER",
    "ADAPTATION HOLES",
    "AFFAIR PREJUDICE",
    "AFRICAN EGG",
    "AGENT TRUMAN",
    "AIRPLANE SIERRA",
    "AIRPORT POLLOCK",
    "ALABAMA DEVIL",
    "ALADDIN CALENDAR",
    "ALAMO VIDEOTAPE",
    "ALASKA PHANTOM",
    "ALI FOREVER",
    "ALICE FANTASIA",
    "ALIEN CENTER",
    "ALLEY EVOLUTION",
    "ALONE TRIP",
    "ALTER VICTORY",
    "AMADEUS HOLY",
    "AMELIE HELLFIGHTERS",
    "AMERICAN CIRCUS",
    "AMISTAD MIDSUMMER",
    "ANACONDA CONFESSIONS",
    "ANALYZE HOOSIERS",
    "ANGELS LIFE",
    "ANNIE IDENTITY",
    "ANONYMOUS HUMAN",
    "ANTHEM LUKE",
    "ANTITRUST TOMATOES",
    "ANYTHING SAVANNAH",
    "APACHE DIVINE",
    "APOCALYPSE FLAMINGOS",
    "APOLLO TEEN",
    "ARABIA DOGMA",
    "ARACHNOPHOBIA ROLLERCOASTER",
    "ARGONAUTS TOWN",
    "ARIZONA BANG",
    "ARK RIDGEMONT",
    "ARMAGEDDON LOST",
    "ARMY FLINTSTONES",
    "ARSENIC INDEPENDENCE",
    "ARTIST COLDBLOODED",
    "ATLANTIS CAUSE",
    "ATTACKS HATE",
    "ATTRACTION NEWTON",
    "AUTUMN CROW",
    "BABY HALL",
    "BACKLASH UNDEFEATED",
    "BADMAN DAWN",
    "BAKED CLEOPATRA",
    "BALLROOM MOCKINGBIRD",
)

SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS film (
    film_id SERIAL PRIMARY KEY,
    title VARCHAR(255) NOT NULL
);
"""


def film_rows() -> list[dict[str, object]]:
    """Seed rows as API-shaped records (`film_id`, `title`), ids from 1."""
    return [{"film_id": i, "title": title} for i, title in enumerate(FILM_TITLES, start=1)]


def titles_starting_with(prefix: str) -> list[str]:
    """Seed titles matching a prefix case-insensitively."""
    lowered = prefix.lower()
    return [title for title in FILM_TITLES if title.lower().startswith(lowered)]


def _quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def render_seed_sql(titles: tuple[str, ...] = FILM_TITLES) -> str:
    """Render the schema and INSERT statements for the given titles."""
    lines = [SCHEMA_SQL]
    if titles:
        values = ",\n".join(
            f"    ({film_id}, {_quote(title)})" for film_id, title in enumerate(titles, start=1)
        )
        lines.append(f"INSERT INTO film (film_id, title) VALUES\n{values};\n")
        # Keep SERIAL in step with the explicit ids
        lines.append("SELECT setval('film_film_id_seq', (SELECT MAX(film_id) FROM film));\n")
    return "\n".join(lines)


def load_seed_sql(database: config_types.DatabaseConfig) -> str:
    """
    Return the SQL used to seed the fixture.

    A configured `seed_file` replaces the bundled films entirely.
    """
    if database.seed_file:
        return _pathlib.Path(database.seed_file).expanduser().read_text(encoding="utf-8")
    return render_seed_sql()
