"""Marketplace sales report loader."""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from config import INGEST_WORKERS, TRIED_ENCODINGS
from models import Source

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _clean_cell(cell: str) -> str:
    cell = cell.strip()
    if cell.startswith('"'):
        cell = cell[1:]
    if cell.endswith('"'):
        cell = cell[:-1]
    return cell


def parse_csv_text(text: str) -> Tuple[Tuple[str, ...], Tuple[Tuple[str, ...], ...]]:
    """
    Split raw report text into a header row and data rows.

    Lines are split on plain commas; quoted cells that contain commas are NOT
    supported (the cell is split like any other). Lines yielding fewer than
    two cells are dropped, which also drops trailing blank lines.

    Args:
        text: Full file contents

    Returns:
        (headers, rows); both empty when the text has no usable line
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = []
    for line in _LINE_BREAK.split(text):
        cells = tuple(_clean_cell(c) for c in line.split(","))
        if len(cells) > 1:
            lines.append(cells)

    if not lines:
        return (), ()
    return lines[0], tuple(lines[1:])


def header_universe(sources: Iterable[Source]) -> List[str]:
    """Union of all headers across sources, first-seen order, no duplicates."""
    seen = set()
    out: List[str] = []
    for src in sources:
        for h in src.headers:
            if h not in seen:
                seen.add(h)
                out.append(h)
    return out


class MarketplaceReportLoader:
    """Load marketplace CSV exports into immutable Sources."""

    def __init__(self, workers: int = INGEST_WORKERS):
        """
        Initialize loader.

        Args:
            workers: Threads used to parse several files at once
        """
        self.workers = max(1, int(workers))

    def load_text(self, name: str, text: str) -> Source:
        """
        Parse one report already read into memory.

        A file without any usable line becomes an empty Source; it is kept so
        the caller's file list stays aligned, and simply yields no rows.
        """
        headers, rows = parse_csv_text(text or "")
        if not headers:
            logging.warning(f"[Loader] {name}: no usable lines; treated as empty.")
        else:
            logging.info(f"[Loader] {name}: {len(headers)} columns, {len(rows)} rows")
        return Source(name=name, headers=headers, rows=rows)

    def _read_text(self, file: Path) -> str:
        """
        Read a report with encoding fallback.

        Tries multiple encodings to handle exports saved by different tools.
        """
        data = file.read_bytes()
        for enc in TRIED_ENCODINGS:
            try:
                return data.decode(enc)
            except UnicodeDecodeError:
                continue

        # latin1 maps every byte, so this never fails
        logging.warning(f"[Loader] {file.name}: decoded as latin1.")
        return data.decode("latin1")

    def load_file(self, path) -> Source:
        file = Path(path)
        return self.load_text(file.name, self._read_text(file))

    def load_files(self, paths: Sequence) -> List[Source]:
        """
        Load several report files.

        Files are parsed in parallel but returned in the order given.

        Args:
            paths: Report file paths in selection order

        Returns:
            One Source per path
        """
        paths = [Path(p) for p in paths]
        if len(paths) <= 1 or self.workers == 1:
            return [self.load_file(p) for p in paths]

        with ThreadPoolExecutor(max_workers=min(self.workers, len(paths))) as ex:
            return list(ex.map(self.load_file, paths))
