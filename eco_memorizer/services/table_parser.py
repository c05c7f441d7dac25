"""Parser for the chessgames.com ECO help table.

Each table row holds the ECO code in its first cell and, in its last
cell, the opening name followed by the canonical moves on the next line:

    <tr><td>C50</td><td>Italian Game<br>e4 e5 Nf3 Nc6 Bc4</td></tr>
"""

import logging
from types import MappingProxyType

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from ..exceptions import ParseFailedError
from ..models.eco import MoveIndex, MoveRecord

logger = logging.getLogger(__name__)


def _cell_text(cell) -> str:
    """Text of a table cell with <br> elements turned into newlines."""
    for br in cell.find_all("br"):
        br.replace_with("\n")
    return cell.get_text()


def parse_row(row) -> MoveRecord | None:
    """Build a MoveRecord from one <tr>.

    Returns None for rows without data cells (headers, layout rows).

    Raises:
        ValueError: If the row has cells but is not a code/name/moves row.
    """
    cells = row.find_all("td")
    if not cells:
        return None

    code = cells[0].get_text().strip()
    if not code:
        raise ValueError("empty ECO code")

    parts = _cell_text(cells[-1]).split("\n", 1)
    if len(parts) < 2:
        raise ValueError(f"no moves line for code {code!r}")

    return MoveRecord(code=code, name=parts[0].strip(), moves=parts[1].strip())


def parse_eco_table(raw_markup: bytes) -> MoveIndex:
    """Parse the ECO help page into an immutable code -> record index.

    Rows are read in document order and a later row with the same code
    replaces an earlier one.

    Args:
        raw_markup: Raw bytes of the upstream HTML document.

    Returns:
        Read-only mapping from ECO code to MoveRecord.

    Raises:
        ParseFailedError: If the markup is rejected or holds no ECO rows.
    """
    try:
        soup = BeautifulSoup(raw_markup, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseFailedError(f"Unparseable ECO document: {e}") from e

    records: dict[str, MoveRecord] = {}
    skipped = 0
    for index, row in enumerate(soup.find_all("tr")):
        try:
            record = parse_row(row)
        except ValueError as e:
            skipped += 1
            logger.warning(f"Skipping malformed ECO row {index}: {e}")
            continue
        if record is not None:
            records[record.code] = record

    if not records:
        raise ParseFailedError("No ECO rows found in document")

    logger.info(f"Parsed {len(records)} ECO codes ({skipped} malformed rows skipped)")
    return MappingProxyType(records)
