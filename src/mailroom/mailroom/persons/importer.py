"""Read person rosters for bulk import.

Row layout (no header required): ``LastName,FirstName,EmailAddress,PersonID``.
A first row whose last cell reads "PersonID" is treated as a header. CSV files
go through the csv module, Excel workbooks through pandas.
"""
from __future__ import annotations

import csv
import io
import zipfile
from pathlib import Path
from typing import IO, Iterable, Sequence, Union

import pandas as pd

from ..core.constants import CSV_COLUMNS
from ..core.exceptions import ValidationError
from ..ledger.model import ImportFailure
from .model import PersonRecord

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}

Source = Union[str, Path, IO]


def _is_header(cells: Sequence[str]) -> bool:
    return bool(cells) and cells[-1].replace(" ", "").replace("_", "").lower() == "personid"


def parse_person_rows(rows: Iterable[Sequence[str]]) -> tuple[list[PersonRecord], list[ImportFailure]]:
    records: list[PersonRecord] = []
    failures: list[ImportFailure] = []

    for row_number, raw in enumerate(rows, start=1):
        cells = [str(c).strip() for c in raw]
        while cells and not cells[-1]:
            cells.pop()
        if not cells:
            continue
        if row_number == 1 and _is_header(cells):
            continue
        if len(cells) != len(CSV_COLUMNS):
            failures.append(
                ImportFailure(
                    row_number=row_number,
                    person_id=cells[-1] or None,
                    reason=f"Expected {len(CSV_COLUMNS)} columns, got {len(cells)}",
                )
            )
            continue

        last_name, first_name, email_address, person_id = cells
        records.append(
            PersonRecord(
                person_id=person_id,
                first_name=first_name,
                last_name=last_name,
                email_address=email_address,
                row_number=row_number,
            )
        )
    return records, failures


def read_person_csv(source: Source) -> tuple[list[PersonRecord], list[ImportFailure]]:
    if isinstance(source, (str, Path)):
        with open(source, newline="", encoding="utf-8-sig") as fh:
            return parse_person_rows(csv.reader(fh))
    if isinstance(source, io.TextIOBase):
        return parse_person_rows(csv.reader(source))
    text = io.TextIOWrapper(source, encoding="utf-8-sig", newline="")
    return parse_person_rows(csv.reader(text))


def read_person_excel(source: Source) -> tuple[list[PersonRecord], list[ImportFailure]]:
    df = pd.read_excel(source, header=None, dtype=str).fillna("")
    return parse_person_rows(df.values.tolist())


def read_persons(source: Source, *, filename: str | None = None) -> tuple[list[PersonRecord], list[ImportFailure]]:
    """Dispatch on the file extension (of ``filename`` or the path itself).

    A file that cannot be read at all raises ValidationError; row-level
    problems come back as ImportFailure entries.
    """
    name = filename or (str(source) if isinstance(source, (str, Path)) else "")
    display = Path(name).name or "upload"
    if Path(name).suffix.lower() in EXCEL_SUFFIXES:
        try:
            return read_person_excel(source)
        except (ValueError, zipfile.BadZipFile) as e:
            raise ValidationError(f"{display} is not a readable Excel workbook: {e}") from e
    try:
        return read_person_csv(source)
    except UnicodeDecodeError as e:
        raise ValidationError(f"{display} is not UTF-8 encoded; save the roster as CSV UTF-8") from e
    except csv.Error as e:
        raise ValidationError(f"{display} is not a readable CSV file: {e}") from e
