"""Vendor feed read from a CSV catalog export."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from vendorrecon.domain.errors import FeedError, InputError
from vendorrecon.domain.model import VendorRecord
from vendorrecon.domain.ports import FeedBatch, RejectedRow

from .schema import VENDOR_COLUMNS, VendorRowPayload

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from vendorrecon.domain.ports import VendorFeed

log = getLogger(__name__)


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'row'}: {error['msg']}"
        for error in exc.errors()
    )


def read_csv_rows(
    path: Path, *, required: Sequence[str], encoding: str = "utf-8-sig"
) -> Iterator[tuple[int, dict[str, str]]]:
    """Yield ``(line, row)`` pairs, raising ``FeedError`` if the file is unusable."""

    try:
        with path.open(newline="", encoding=encoding) as handle:
            reader = csv.DictReader(handle)
            columns = [name.strip().lower() for name in reader.fieldnames or ()]
            missing = [name for name in required if name not in columns]
            if missing:
                raise FeedError(f"{path} is missing column(s): {', '.join(missing)}")
            reader.fieldnames = columns
            for row in reader:
                yield reader.line_num, {key: value for key, value in row.items() if key}
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise FeedError(f"Cannot read {path}: {exc}") from exc


@dataclass(frozen=True, slots=True)
class CsvVendorFeed:
    """Feed over a vendor CSV export; every call re-reads the file."""

    path: Path
    encoding: str = "utf-8-sig"

    def __call__(self) -> FeedBatch:
        batch = FeedBatch()
        for line, row in read_csv_rows(
            Path(self.path), required=VENDOR_COLUMNS, encoding=self.encoding
        ):
            try:
                payload = VendorRowPayload.model_validate(row)
                record = VendorRecord(
                    vendor_sku=payload.sku,
                    upc=payload.upc,
                    cost=payload.cost,
                    suggested_retail=payload.retail,
                    weight=payload.weight,
                    description=payload.desc,
                )
            except ValidationError as exc:
                batch.rejected.append(RejectedRow(line=line, reason=_describe(exc)))
                log.warning(f"Rejected {self.path} line {line}: {_describe(exc)}")
                continue
            except InputError as exc:
                batch.rejected.append(RejectedRow(line=line, reason=str(exc)))
                log.warning(f"Rejected {self.path} line {line}: {exc}")
                continue
            batch.records.append(record)

        log.info(
            "Read %s vendor record(s) from %s, rejected %s",
            len(batch.records),
            self.path,
            len(batch.rejected),
        )
        return batch


if TYPE_CHECKING:
    _feed_check: VendorFeed = CsvVendorFeed(Path("feed.csv"))
