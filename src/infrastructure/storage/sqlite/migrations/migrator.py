"""
Versioned schema migrations for the stock history database.

Scripts live next to this module and are named ``v<NNN>_<name>.sql``. Each
applied version is recorded in ``schema_migrations`` with a checksum of its
script, so an edited migration is reported rather than run a second time.
"""

import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")


@dataclass(frozen=True)
class MigrationInfo:
    """A migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.fullmatch(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(version=match[1], name=match[2], path=path, checksum=digest[:16])

    @property
    def label(self) -> str:
        return f"v{self.version}_{self.name}"


@dataclass(frozen=True)
class MigrationResult:
    """Outcome of running one migration script."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations() -> list[MigrationInfo]:
    """Migration scripts in version order; misnamed files are skipped."""
    found = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError:
            logger.warning("migration_file_skipped", path=str(path))
    return found


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to the checksum recorded when they ran."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        # Fresh database
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    """Highest applied schema version, None before the first migration."""
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one script and record it. A failing script is rolled back and reported."""
    started = time.perf_counter()
    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        elapsed = _elapsed_ms(started)
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", migration=migration.label, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=_elapsed_ms(started),
            error=str(e),
        )

    logger.info("migration_applied", migration=migration.label, execution_time_ms=elapsed)
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


async def initialize_database(db_path: Path | None = None) -> list[MigrationResult]:
    """
    Bring the stock history schema up to date.

    Pending scripts run in version order and the run stops at the first
    failure, leaving later versions pending.

    Args:
        db_path: Database file (default from settings)

    Returns:
        Results for the scripts that were attempted, empty when up to date
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA foreign_keys=ON")
        applied = await get_applied_migrations(conn)

        for migration in discover_migrations():
            recorded = applied.get(migration.version)
            if recorded is not None:
                if recorded != migration.checksum:
                    logger.warning("migration_checksum_changed", migration=migration.label)
                continue

            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                break

        version = await get_current_version(conn)

    logger.info(
        "stock_history_schema_ready",
        db_path=str(db_path),
        schema_version=version,
        applied=sum(r.success for r in results),
    )
    return results
