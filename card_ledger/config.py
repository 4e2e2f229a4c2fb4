"""Configuration management for card-ledger."""

from dataclasses import dataclass, field
from pathlib import Path

from card_ledger.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")


@dataclass
class StatementConfig:
    """Statement (invoice) output configuration."""

    output_dir: Path = field(default_factory=lambda: Path("statements"))
    strict: bool = False  # raise ReportWriteError instead of logging
    encoding: str = "utf-8"

    def path_for(self, number: int) -> Path:
        """Get the default statement path for an account number."""
        return self.output_dir / f"invoice_{number}.txt"


@dataclass
class ExportConfig:
    """JSON export configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Main configuration for card-ledger."""

    statement: StatementConfig = field(default_factory=StatementConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        statement = StatementConfig(
            output_dir=Path(os.getenv("STATEMENT_DIR", "statements")),
            strict=os.getenv("STATEMENT_STRICT", "false").lower() == "true",
            encoding=os.getenv("STATEMENT_ENCODING", "utf-8"),
        )

        export = ExportConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as e:
            raise ConfigurationError(f"SEED must be an integer, got {seed_str!r}") from e

        log_format = os.getenv("LOG_FORMAT", "standard").lower()
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}"
            )

        return cls(
            statement=statement,
            export=export,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )
