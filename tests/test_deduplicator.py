"""Tests for record deduplication."""

import itertools
import random

import pytest

from string_scanner.core.deduplicator import deduplicate, sort_records
from string_scanner.core.models import StringRecord


def record(file, line, column, text, localized=False):
    return StringRecord(
        file=file,
        line=line,
        column=column,
        raw_text=f'"{text}"',
        normalized_text=text,
        is_localized=localized,
    )


class TestSortRecords:
    """Test cases for canonical ordering."""

    def test_orders_by_file_line_column(self):
        records = [
            record('b.swift', 1, 1, '乙'),
            record('a.swift', 2, 5, '甲'),
            record('a.swift', 2, 1, '丙'),
            record('a.swift', 1, 9, '丁'),
        ]
        ordered = sort_records(records)
        assert [r.sort_key for r in ordered] == [
            ('a.swift', 1, 9),
            ('a.swift', 2, 1),
            ('a.swift', 2, 5),
            ('b.swift', 1, 1),
        ]


class TestDeduplicate:
    """Test cases for deduplicate()."""

    def test_keeps_first_occurrence(self):
        records = [
            record('b.swift', 3, 1, '确定'),
            record('a.swift', 10, 4, '确定'),
        ]
        unique = deduplicate(records)
        assert len(unique) == 1
        assert unique[0].file == 'a.swift'

    def test_localized_upgrade(self):
        """A later localized record replaces an earlier non-localized one."""
        records = [
            record('a.swift', 1, 1, '确定'),
            record('z.swift', 1, 1, '确定', localized=True),
        ]
        unique = deduplicate(records)
        assert len(unique) == 1
        assert unique[0].file == 'z.swift'
        assert unique[0].is_localized

    def test_localized_not_downgraded(self):
        records = [
            record('a.swift', 1, 1, '确定', localized=True),
            record('b.swift', 1, 1, '确定'),
        ]
        unique = deduplicate(records)
        assert unique[0].file == 'a.swift'
        assert unique[0].is_localized

    def test_first_localized_wins_among_localized(self):
        records = [
            record('c.swift', 1, 1, '确定', localized=True),
            record('a.swift', 1, 1, '确定'),
            record('b.swift', 1, 1, '确定', localized=True),
        ]
        unique = deduplicate(records)
        assert unique[0].file == 'b.swift'

    def test_result_sorted(self):
        records = [
            record('b.swift', 1, 1, '乙'),
            record('a.swift', 5, 1, '甲'),
            record('a.swift', 1, 1, '丙'),
        ]
        unique = deduplicate(records)
        assert [r.normalized_text for r in unique] == ['丙', '甲', '乙']

    def test_empty_input(self):
        assert deduplicate([]) == []

    def test_order_independence(self):
        """Every permutation of the input gives the same output."""
        records = [
            record('a.swift', 1, 1, '确定'),
            record('a.swift', 2, 3, '取消'),
            record('b.swift', 1, 1, '确定', localized=True),
            record('c.swift', 4, 2, '取消'),
            record('c.swift', 5, 2, '保存'),
        ]
        expected = deduplicate(records)

        for permutation in itertools.permutations(records):
            assert deduplicate(permutation) == expected

    def test_idempotent(self):
        rng = random.Random(7)
        texts = ['确定', '取消', '保存', '删除']
        records = [
            record(f'{rng.choice("abc")}.swift', rng.randint(1, 50), rng.randint(1, 30),
                   rng.choice(texts), localized=rng.random() < 0.3)
            for _ in range(40)
        ]
        once = deduplicate(records)
        assert deduplicate(once) == once

    def test_unique_keys(self):
        records = [record('a.swift', i, 1, text) for i, text in enumerate(['甲', '乙', '甲', '丙', '乙'], 1)]
        unique = deduplicate(records)
        keys = [r.normalized_text for r in unique]
        assert len(keys) == len(set(keys)) == 3


class TestStringRecord:
    """Test cases for StringRecord validation."""

    def test_rejects_empty_text(self):
        with pytest.raises(ValueError):
            record('a.swift', 1, 1, '')

    def test_rejects_zero_position(self):
        with pytest.raises(ValueError):
            record('a.swift', 0, 1, '甲')
        with pytest.raises(ValueError):
            record('a.swift', 1, 0, '甲')

    def test_to_dict(self):
        data = record('a.swift', 3, 7, '甲', localized=True).to_dict()
        assert data == {
            'file': 'a.swift',
            'line': 3,
            'column': 7,
            'raw_text': '"甲"',
            'normalized_text': '甲',
            'is_localized': True,
        }
