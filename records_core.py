# records_core.py — record list state transitions (filter, selection, delete, import)
from __future__ import annotations
import base64, io, logging
from typing import Iterable, List, Optional, Tuple
import pandas as pd

from config import PREVIEW_LIMIT

logger = logging.getLogger(__name__)

LEVELS = ["Intern", "Junior", "Senior"]
ALL_LEVELS = "All"


def record_id(rec: dict) -> Optional[str]:
    rid = (rec or {}).get("id")
    return None if rid is None else str(rid)


def record_ids(records: Iterable[dict]) -> List[str]:
    return [rid for rid in (record_id(r) for r in (records or [])) if rid is not None]


def _text(df: pd.DataFrame, col: str) -> pd.Series:
    if col not in df.columns:
        return pd.Series("", index=df.index)
    return df[col].fillna("").astype(str)


def filter_records(records: List[dict], query: str = "", level: str = ALL_LEVELS) -> List[dict]:
    """Records whose name or position contains ``query`` (case-insensitive)
    and whose level equals ``level`` ("All" matches every level).
    Source order is kept and the input dicts are returned as-is.
    """
    records = list(records or [])
    if not records:
        return []
    df = pd.DataFrame(records)
    q = (query or "").lower()
    mask = (
        _text(df, "name").str.lower().str.contains(q, regex=False)
        | _text(df, "position").str.lower().str.contains(q, regex=False)
    )
    if level and level != ALL_LEVELS:
        mask &= _text(df, "level") == level
    return [records[i] for i in df.index[mask.to_numpy()]]


# ---------------------- selection ----------------------

def toggle_select(selected: List[str], rid: str) -> List[str]:
    selected = list(selected or [])
    if rid in selected:
        return [s for s in selected if s != rid]
    return selected + [rid]


def toggle_select_all(selected: List[str], records: List[dict]) -> List[str]:
    # selection spans the unfiltered list
    if len(selected or []) == len(records or []):
        return []
    return record_ids(records)


def prune_selection(selected: List[str], records: List[dict]) -> List[str]:
    """Drop selected ids that are no longer in ``records``."""
    live = set(record_ids(records))
    return [s for s in (selected or []) if s in live]


def all_selected(selected: List[str], records: List[dict]) -> bool:
    return len(selected or []) == len(records or [])


# ---------------------- delete ----------------------

def remove_records(records: List[dict], ids: Iterable[str]) -> List[dict]:
    drop = {str(i) for i in ids}
    return [r for r in (records or []) if record_id(r) not in drop]


def delete_records(client, ids: List[str], records: List[dict]) -> Tuple[List[dict], List[str]]:
    """Delete ``ids`` one request at a time, then prune them all locally.

    Local pruning happens even for ids the server refused; those ids are
    logged and returned as the second element.
    """
    failed = []
    for rid in ids:
        if not client.delete_record(rid):
            failed.append(rid)
    if failed:
        logger.warning("Delete failed for %d of %d record(s): %s", len(failed), len(ids), ", ".join(failed))
    return remove_records(records, ids), failed


# ---------------------- spreadsheet import ----------------------

def decode_upload(contents: str) -> bytes:
    """Bytes of a dcc.Upload ``contents`` data URL."""
    _, b64 = contents.split(",", 1)
    return base64.b64decode(b64)


def _cell(v):
    # a column with blanks comes back as float64; 7.0 was typed as 7
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


def sheet_rows(df: pd.DataFrame, limit: Optional[int] = PREVIEW_LIMIT) -> List[dict]:
    """Rows keyed by the header row; blank rows skipped, empty cells omitted."""
    if df is None or df.empty:
        return []
    df = df.dropna(how="all")
    if limit is not None:
        df = df.head(limit)
    rows = []
    for rec in df.astype(object).to_dict("records"):
        rows.append({str(k): _cell(v) for k, v in rec.items() if not pd.isna(v)})
    return rows


def read_workbook(data: bytes, limit: Optional[int] = PREVIEW_LIMIT) -> List[dict]:
    """Parse the first sheet of an .xlsx/.xls workbook into preview rows.
    Parser errors are not caught here.
    """
    df = pd.read_excel(io.BytesIO(data), sheet_name=0)
    return sheet_rows(df, limit=limit)


def insert_preview(client, preview: List[dict], records: List[dict]) -> Optional[List[dict]]:
    """Send the preview rows to multi-insert; the new record list on success, None otherwise."""
    if not preview:
        return None
    if not client.insert_many(preview):
        logger.error("Error inserting data")
        return None
    return list(records or []) + list(preview)
