"""JSON file sink for exporting account ledgers."""

import json
from pathlib import Path

from card_ledger.exceptions import ReportWriteError
from card_ledger.logging import get_logger
from card_ledger.models.account import Account
from card_ledger.sinks.serialization import to_dict

logger = get_logger(__name__)


class JsonFileSink:
    """Output account snapshots to JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.pretty = pretty
        self._counts: dict[int, int] = {}

    def write_account(self, account: Account) -> Path:
        """Write one account snapshot (with its purchases) to a JSON file.

        Returns
        -------
        Path
            Path of the written file.

        Raises
        ------
        ReportWriteError
            If the directory or file cannot be written, or a description
            cannot be encoded. No partial file is left behind.
        """
        snapshot = account.snapshot()
        file_path = self.output_dir / f"account_{snapshot.number}.json"
        tmp_path = file_path.with_name(file_path.name + ".tmp")
        data = to_dict(snapshot)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
            tmp_path.replace(file_path)
        except (OSError, UnicodeError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise ReportWriteError(f"Could not export account {snapshot.number}: {e}") from e

        self._counts[snapshot.number] = len(snapshot.purchases)
        logger.debug(
            "Exported account %s to %s",
            snapshot.number,
            file_path,
            extra={"extra": {"account": snapshot.number, "destination": str(file_path)}},
        )
        return file_path

    def close(self) -> None:
        """Log a summary of what was written."""
        logger.info("JSON files written to: %s", self.output_dir)
        for number, count in self._counts.items():
            logger.info("  account %s: %d purchases", number, count)
