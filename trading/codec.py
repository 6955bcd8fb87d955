"""Line-oriented snapshot format for the user directory.

Each user is written as one record::

    USER:<username>
    CASH:<cash balance>
    HOLDINGS:
    <symbol>:<quantity>          (one per holding)
    TRANSACTIONS:
    <rendered transaction>       (one per trade, oldest first)
    END_USER

Encoding is complete but decoding is deliberately lossy for history: rendered
transaction lines are not parsed back. Each one becomes a ``LOAD`` placeholder
entry, so a restored log has the right *length* but none of the original
kinds, symbols, quantities or prices.

Holdings are restored at zero cost basis through ``Portfolio.deposit_shares``.
Symbols the registry no longer lists get a zero-price placeholder ``Stock``
so the holding still comes back; the valuation then ignores it.

Failure policy on decode:

* a holding line that is not exactly ``symbol:quantity`` (with a positive
  integer quantity) is skipped with a warning;
* a record that ends (next ``USER:`` or end of input) before ``END_USER``,
  lacks ``TRANSACTIONS:``, or has an unreadable ``CASH:`` line raises
  ``MalformedSnapshot``; ``decode`` logs it, drops that user and resumes at
  the next ``USER:`` marker;
* lines outside any record are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from models.stock import Stock
from models.transaction import Transaction
from trading.directory import User, UserDirectory
from trading.errors import MalformedSnapshot
from trading.market import StockRegistry

logger = logging.getLogger(__name__)

USER_PREFIX = "USER:"
CASH_PREFIX = "CASH:"
HOLDINGS_MARKER = "HOLDINGS:"
TRANSACTIONS_MARKER = "TRANSACTIONS:"
END_MARKER = "END_USER"


# ------------------------------------------------------------------
# Encode
# ------------------------------------------------------------------

def encode(directory: UserDirectory) -> list[str]:
    """Serialize every user in *directory* (in directory order) to lines."""
    lines: list[str] = []
    for user in directory:
        lines.extend(encode_user(user))
    return lines


def encode_user(user: User) -> list[str]:
    portfolio = user.portfolio
    lines = [
        f"{USER_PREFIX}{user.username}",
        f"{CASH_PREFIX}{format(portfolio.cash_balance, 'f')}",
        HOLDINGS_MARKER,
    ]
    lines.extend(f"{symbol}:{qty}" for symbol, qty in portfolio.holdings.items())
    lines.append(TRANSACTIONS_MARKER)
    lines.extend(user.transaction_log.render_lines())
    lines.append(END_MARKER)
    return lines


# ------------------------------------------------------------------
# Decode
# ------------------------------------------------------------------

def decode(lines: Iterable[str], registry: StockRegistry) -> UserDirectory:
    """Rebuild a ``UserDirectory`` from snapshot *lines*.

    Always returns a fresh directory; malformed user records are logged and
    left out rather than aborting the whole load.
    """
    directory = UserDirectory()
    skipped = 0
    for record in _split_records(lines):
        try:
            user = decode_user(record.lines, registry, terminated=record.terminated)
        except MalformedSnapshot as exc:
            skipped += 1
            logger.error("Skipping user record starting at line %d: %s", record.start, exc)
            continue
        directory.add(user)

    logger.info("Decoded %d user(s) from snapshot (%d record(s) skipped).", len(directory), skipped)
    return directory


def decode_user(
    numbered_lines: list[tuple[int, str]],
    registry: StockRegistry,
    terminated: bool = True,
) -> User:
    """Decode one user record.

    *numbered_lines* are ``(line_no, text)`` pairs starting with the
    ``USER:`` line and excluding ``END_USER``. *terminated* tells whether the
    record was closed by ``END_USER``.

    Raises ``MalformedSnapshot`` if the record is structurally incomplete.
    """
    if not numbered_lines or not numbered_lines[0][1].startswith(USER_PREFIX):
        raise MalformedSnapshot("Record does not start with USER:")

    start, header = numbered_lines[0]
    username = header[len(USER_PREFIX):]
    if not username:
        raise MalformedSnapshot("Empty username", line_no=start)

    user = User(username)
    section = "header"
    saw_cash = False

    for line_no, line in numbered_lines[1:]:
        if section == "header":
            if line.startswith(CASH_PREFIX):
                if saw_cash:
                    raise MalformedSnapshot("Duplicate CASH line", line_no=line_no, username=username)
                user.portfolio.deposit(_parse_cash(line[len(CASH_PREFIX):], line_no, username))
                saw_cash = True
            elif line == HOLDINGS_MARKER:
                section = "holdings"
            elif line == TRANSACTIONS_MARKER:
                section = "transactions"
            else:
                logger.warning("Ignoring unexpected line %d in record for '%s': %r", line_no, username, line)
        elif section == "holdings":
            if line == TRANSACTIONS_MARKER:
                section = "transactions"
            else:
                _restore_holding(user, line, line_no, registry)
        else:
            # History content is not recoverable; keep only the count.
            user.transaction_log.append(Transaction.restored())

    if not saw_cash:
        raise MalformedSnapshot("Missing CASH line", line_no=start, username=username)
    if section != "transactions":
        raise MalformedSnapshot(
            f"Missing {TRANSACTIONS_MARKER} for user '{username}'", line_no=start, username=username
        )
    if not terminated:
        raise MalformedSnapshot(
            f"Missing {END_MARKER} for user '{username}'", line_no=start, username=username
        )
    return user


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------

@dataclass
class _Record:
    start: int
    lines: list[tuple[int, str]] = field(default_factory=list)
    terminated: bool = False


def _split_records(lines: Iterable[str]) -> Iterator[_Record]:
    """Group lines into per-user records.

    A record runs from a ``USER:`` line up to ``END_USER``. If another
    ``USER:`` line or the end of input arrives first, the open record is
    yielded unterminated.
    """
    current: _Record | None = None
    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if line.startswith(USER_PREFIX):
            if current is not None:
                yield current
            current = _Record(start=line_no, lines=[(line_no, line)])
        elif current is None:
            if line.strip():
                logger.debug("Ignoring line %d outside any user record: %r", line_no, line)
        elif line == END_MARKER:
            current.terminated = True
            yield current
            current = None
        else:
            current.lines.append((line_no, line))
    if current is not None:
        yield current


def _parse_cash(text: str, line_no: int, username: str) -> Decimal:
    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        raise MalformedSnapshot(f"Unreadable cash balance {text!r}", line_no=line_no, username=username) from None
    if not amount.is_finite() or amount < 0:
        raise MalformedSnapshot(f"Invalid cash balance {text!r}", line_no=line_no, username=username)
    return amount


def _restore_holding(user: User, line: str, line_no: int, registry: StockRegistry) -> None:
    parts = line.split(":")
    if len(parts) != 2 or not parts[0]:
        logger.warning("Skipping malformed holding line %d for '%s': %r", line_no, user.username, line)
        return
    symbol, qty_text = parts
    try:
        quantity = int(qty_text)
    except ValueError:
        logger.warning("Skipping holding line %d for '%s': bad quantity %r", line_no, user.username, qty_text)
        return
    if quantity <= 0:
        logger.warning("Skipping holding line %d for '%s': non-positive quantity %d", line_no, user.username, quantity)
        return

    stock = registry.lookup(symbol)
    if stock is None:
        logger.info("Symbol '%s' is not listed; restoring holding with a zero-price placeholder.", symbol)
        stock = Stock.placeholder(symbol)
    user.portfolio.deposit_shares(stock, quantity)
