"""
CSV batch adapter.
Streams rows from a CSV source, resolves each link and streams the
resolved rows to a CSV sink, one round trip per row.
"""

import asyncio
import csv
from dataclasses import dataclass
from typing import Optional, Iterator, TextIO, Dict

from ..api.client import Client
from ..api.async_client import AsyncClient
from ..api.models import LinkInfo, IoError
from ..utils.constants import BOM, CSV_INPUT_COLUMNS, CSV_OUTPUT_COLUMNS
from ..utils.logging import get_logger

logger = get_logger(__name__)

@dataclass(frozen=True)
class CsvRow:
    """
    One decoded input row. Empty strings stand for absent values.
    
    Attributes:
        page (str): Page containing the link
        link (str): URL to resolve
        label (str): Caller annotation
    """
    page: str
    link: str
    label: str

    @property
    def page_or_none(self) -> Optional[str]:
        return self.page or None

    @property
    def label_or_none(self) -> Optional[str]:
        return self.label or None

def _is_text(value: str) -> bool:
    # Undecodable input bytes arrive as lone surrogates
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        return False
    return True

def _decode_row(raw: Dict[Optional[str], Optional[str]]) -> Optional[CsvRow]:
    # Fields beyond the header land under the None key
    if None in raw:
        return None
    values = [raw.get(column) for column in CSV_INPUT_COLUMNS]
    if any(value is None or not _is_text(value) for value in values):
        return None
    return CsvRow(*values)

def _strip_bom(reader: csv.DictReader) -> None:
    fieldnames = reader.fieldnames
    if fieldnames and fieldnames[0].startswith(BOM):
        reader.fieldnames = [fieldnames[0][len(BOM):]] + list(fieldnames[1:])

def iter_rows(source: TextIO) -> Iterator[CsvRow]:
    """
    Yield decodable rows from source in order.
    Rows that fail to decode are skipped: missing or extra fields,
    records the csv module rejects, and fields holding invalid UTF-8
    (when the source decodes with errors='surrogateescape').
    
    Raises:
        IoError: If reading from source fails
    """
    reader = csv.DictReader(source)
    try:
        _strip_bom(reader)
    except csv.Error as e:
        logger.debug(f"Unreadable CSV header, no rows to resolve: {e}")
        return
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(f"Cannot read CSV input: {e}") from e

    line = 1
    while True:
        line += 1
        try:
            raw = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.debug(f"Skipping unreadable CSV record {line}: {e}")
            continue
        except (OSError, UnicodeDecodeError) as e:
            raise IoError(f"Cannot read CSV input: {e}") from e

        row = _decode_row(raw)
        if row is None:
            logger.debug(f"Skipping undecodable CSV record {line}")
            continue
        yield row

def to_output_row(row: CsvRow, info: LinkInfo) -> Dict[str, str]:
    """Build the output record for a resolved input row."""
    return {
        'page': row.page,
        'original': row.link,
        'label': row.label,
        'link': info.link,
        'action': info.action.value
    }

class _RowWriter:
    """DictWriter wrapper translating stream failures into IoError."""

    def __init__(self, sink: TextIO):
        self._writer = csv.DictWriter(sink, fieldnames=list(CSV_OUTPUT_COLUMNS))
        self._sink = sink
        self.written = 0
        self._call(self._writer.writeheader)

    def _call(self, func, *args) -> None:
        try:
            func(*args)
        except OSError as e:
            raise IoError(f"Cannot write CSV output: {e}") from e

    def write(self, row: CsvRow, info: Optional[LinkInfo]) -> None:
        if info is None:
            logger.debug(f"No match for {row.link}")
            return
        self._call(self._writer.writerow, to_output_row(row, info))
        self.written += 1

    def flush(self) -> None:
        self._call(self._sink.flush)

def fetch_with_csv(client: Client, source: TextIO, sink: TextIO) -> int:
    """
    Resolve every row of a CSV source and write the results to sink.
    
    Args:
        client: Blocking client used for each row
        source: CSV text stream with page, link and label columns
        sink: CSV text stream receiving page, original, label, link and action
        
    Returns:
        int: Number of rows written
        
    Raises:
        TransportError, ProtocolDecodeError, UrlParseError: Resolution of a row failed
        IoError: Reading source or writing sink failed
    """
    writer = _RowWriter(sink)
    for row in iter_rows(source):
        info = client.fetch_link(row.link, row.page_or_none, row.label_or_none)
        writer.write(row, info)
    writer.flush()
    logger.info(f"Wrote {writer.written} resolved rows")
    return writer.written

async def async_fetch_with_csv(client: AsyncClient, source: TextIO, sink: TextIO) -> int:
    """
    Async counterpart of fetch_with_csv, rows are still resolved one at a time.
    Stream reads and writes run in a worker thread so a slow source or sink
    does not block the event loop.
    """
    writer = await asyncio.to_thread(_RowWriter, sink)
    rows = iter_rows(source)
    while True:
        row = await asyncio.to_thread(next, rows, None)
        if row is None:
            break
        info = await client.fetch_link(row.link, row.page_or_none, row.label_or_none)
        await asyncio.to_thread(writer.write, row, info)
    await asyncio.to_thread(writer.flush)
    logger.info(f"Wrote {writer.written} resolved rows")
    return writer.written
