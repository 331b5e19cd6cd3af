"""Deterministic merge of records produced by parallel workers."""

from typing import Dict, Iterable, List

from .models import StringRecord


def sort_records(records: Iterable[StringRecord]) -> List[StringRecord]:
    """Stable sort by (file, line, column)."""
    return sorted(records, key=lambda record: record.sort_key)


def deduplicate(records: Iterable[StringRecord]) -> List[StringRecord]:
    """
    Collapse records sharing the same normalized text.

    Records are first put in canonical order so the outcome does not depend
    on the order workers finished in. The earliest record per key wins,
    except that a localized record replaces a non-localized incumbent.

    Args:
        records: Records from any number of files, in any order

    Returns:
        One record per normalized text, sorted by (file, line, column)
    """
    unique: Dict[str, StringRecord] = {}

    for record in sort_records(records):
        incumbent = unique.get(record.normalized_text)
        if incumbent is None or (not incumbent.is_localized and record.is_localized):
            unique[record.normalized_text] = record

    return sort_records(unique.values())
