"""Process settings for termdict.

All knobs are environment-driven through pydantic-settings with the
``TERMDICT_`` prefix (``TERMDICT_DB_PATH``, ``TERMDICT_PORT`` ...) and an
optional ``.env`` file. Unknown variables are ignored.

Examples:
    >>> from termdict.core.settings import TermdictSettings
    >>> s = TermdictSettings(db_path="words.db", db_table="words",
    ...                      db_term_col="word", db_definition_col="meaning",
    ...                      db_audio_col="audio")
    >>> s.schema_override()
    ('words', 'word', 'meaning', 'audio', None)

Tags:
    settings, configuration, pydantic, environment, termdict
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TermdictSettings(BaseSettings):
    """Settings for the dictionary server, CLI and core.

    Fields
    ──────
    db_path           : SQLite dictionary file (opened read-only)
    db_table ...      : Explicit schema override (table + term/definition/audio,
                        optional link). All four required values or none.
    host / port       : Bind address for the HTTP server
    debug             : Expose exception text in 500 responses
    log_level         : Structlog log level
    log_json          : JSON logs (None = auto-detect from TTY)
    public_dir        : Static presentation assets (optional)
    icons_dir         : Directory holding the whitelisted icons (optional)
    """

    model_config = SettingsConfigDict(
        env_prefix="TERMDICT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Store ────────────────────────────────────────────────────
    db_path: Path = Field(default=Path("database.db"), description="SQLite dictionary file")

    # ── Schema override ──────────────────────────────────────────
    db_table: str | None = None
    db_term_col: str | None = None
    db_definition_col: str | None = None
    db_audio_col: str | None = None
    db_link_col: str | None = None

    # ── Queries ──────────────────────────────────────────────────
    list_limit: int = Field(default=10_000, ge=1, description="Cap on listed/searched terms")

    # ── Network ──────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = Field(default=["*"])

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool | None = None

    # ── Presentation ─────────────────────────────────────────────
    public_dir: Path | None = None
    icons_dir: Path | None = None
    icon_names: list[str] = Field(default=["ic1.ico", "ic2.ico", "ic3.ico", "ic4.ico"])

    def schema_override(self) -> tuple[str | None, ...]:
        """Override values in (table, term, definition, audio, link) order."""
        return (
            self.db_table,
            self.db_term_col,
            self.db_definition_col,
            self.db_audio_col,
            self.db_link_col,
        )


@lru_cache(maxsize=1)
def get_settings() -> TermdictSettings:
    """Cached settings — loaded once per process."""
    return TermdictSettings()
