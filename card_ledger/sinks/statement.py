"""Plain-text invoice (statement) rendering, writing and parsing.

The layout is fixed and line-oriented::

    INVOICE FOR: VISA 4111111111111111
    --------------------------------------------
    PURCHASES
    Date		Amount	Description
    19/10/2026	400.00	Groceries
    --------------------------------------------
    TOTAL AMOUNT: USD 400.00
    Remaining limit: USD 600.00
    --------------------------------------------
    Invoice generated at 19/10/2026, 14:05

Body lines end with CRLF, the two total lines end with LF and the final
line has no terminator, matching files produced by earlier versions.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

from card_ledger.exceptions import ReportWriteError
from card_ledger.logging import get_logger
from card_ledger.models.account import Account, AccountSnapshot

logger = get_logger(__name__)

CRLF = "\r\n"
LF = "\n"
SEPARATOR = "-" * 44
HEADER_PREFIX = "INVOICE FOR: "
TABLE_HEADER = "Date\t\tAmount\tDescription"
DATE_FORMAT = "%d/%m/%Y"
DATETIME_FORMAT = "%d/%m/%Y, %H:%M"
CURRENCY = "USD"


@dataclass(frozen=True)
class StatementLine:
    """One purchase row read back from a statement."""

    date: date
    amount: Decimal
    description: str


def format_amount(amount: Decimal) -> str:
    """Format a monetary amount exactly, with at least two decimal places.

    ``Decimal("400")`` prints as ``400.00``; ``Decimal("0.005")`` keeps all
    three places so rows always add up to the total.
    """
    if amount.as_tuple().exponent >= -2:
        return f"{amount:.2f}"
    return f"{amount:f}"


def render_statement(account: Account | AccountSnapshot, generated_at: datetime) -> str:
    """Render the invoice text for an account.

    Parameters
    ----------
    account : Account | AccountSnapshot
        Account to render. Live accounts are snapshotted first so the
        purchases and totals are consistent with each other.
    generated_at : datetime
        Timestamp printed on the last line.

    Returns
    -------
    str
        Invoice text with the legacy line endings.
    """
    snap = account.snapshot() if isinstance(account, Account) else account

    parts = [
        f"{HEADER_PREFIX}{snap.brand} {snap.number}{CRLF}",
        f"{SEPARATOR}{CRLF}",
        f"PURCHASES{CRLF}",
        f"{TABLE_HEADER}{CRLF}",
    ]
    for purchase in snap.purchases:
        parts.append(
            f"{purchase.timestamp.strftime(DATE_FORMAT)}\t"
            f"{format_amount(purchase.amount)}\t"
            f"{_single_line(purchase.description)}{CRLF}"
        )
    parts.extend(
        [
            f"{SEPARATOR}{CRLF}",
            f"TOTAL AMOUNT: {CURRENCY} {format_amount(snap.balance)}{LF}",
            f"Remaining limit: {CURRENCY} {format_amount(snap.available_limit)}{LF}",
            f"{SEPARATOR}{CRLF}",
            f"Invoice generated at {generated_at.strftime(DATETIME_FORMAT)}",
        ]
    )
    return "".join(parts)


def write_statement(
    account: Account,
    destination: str | Path,
    *,
    generated_at: datetime | None = None,
    strict: bool = False,
    encoding: str = "utf-8",
) -> bool:
    """Write an account's invoice to a file.

    Writing is best-effort: an I/O failure is logged and ``False`` is
    returned. With ``strict=True`` the failure is raised as
    ``ReportWriteError`` instead. The file handle is closed on every path;
    a failure while closing is logged and never raised.

    Parameters
    ----------
    account : Account
        Account to export.
    destination : str | Path
        Output file path.
    generated_at : datetime | None
        Generation timestamp (default: now).
    strict : bool
        Raise ``ReportWriteError`` instead of logging write failures.
    encoding : str
        Text encoding of the output file.

    Returns
    -------
    bool
        ``True`` if the invoice was written and closed cleanly.
    """
    path = Path(destination)
    context = {"extra": {"account": account.number, "destination": str(path)}}
    text = render_statement(account, generated_at or datetime.now())

    written = False
    closed = False
    handle = None
    try:
        # newline="" keeps the CRLF/LF mix byte-for-byte on every platform
        handle = open(path, "w", encoding=encoding, newline="")
        handle.write(text)
        written = True
    except (OSError, UnicodeError) as e:
        logger.error("Error while exporting credit card invoice: %s", e, extra=context)
        if strict:
            raise ReportWriteError(f"Could not write invoice to {path}: {e}") from e
    finally:
        if handle is not None:
            try:
                handle.close()
                closed = True
            except (OSError, UnicodeError) as e:
                logger.error("Error while closing invoice file %s: %s", path, e, extra=context)

    if not (written and closed):
        return False

    logger.info("CC %s | Invoice generated in %s", account.number, path, extra=context)
    return True


def parse_statement(text: str) -> list[StatementLine]:
    """Read the purchase rows back from invoice text.

    Raises
    ------
    ValueError
        If the text does not look like an invoice.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]

    if not lines or not lines[0].startswith(HEADER_PREFIX):
        raise ValueError("Not an invoice: missing 'INVOICE FOR' header")
    try:
        start = lines.index(TABLE_HEADER) + 1
    except ValueError:
        raise ValueError("Not an invoice: missing purchases table") from None

    rows: list[StatementLine] = []
    for line in lines[start:]:
        if line == SEPARATOR:
            return rows
        fields = line.split("\t", 2)
        if len(fields) != 3:
            raise ValueError(f"Malformed purchase row: {line!r}")
        date_str, amount_str, description = fields
        try:
            row_date = datetime.strptime(date_str, DATE_FORMAT).date()
            amount = Decimal(amount_str)
        except (ValueError, InvalidOperation) as e:
            raise ValueError(f"Malformed purchase row: {line!r}") from e
        rows.append(StatementLine(row_date, amount, description))

    raise ValueError("Not an invoice: purchases table is not terminated")


def _single_line(description: str) -> str:
    return description.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")
