"""Output sinks for statements and ledger exports."""

from card_ledger.sinks.json_file import JsonFileSink
from card_ledger.sinks.statement import (
    StatementLine,
    parse_statement,
    render_statement,
    write_statement,
)

__all__ = [
    "JsonFileSink",
    "StatementLine",
    "parse_statement",
    "render_statement",
    "write_statement",
]
