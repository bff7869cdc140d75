"""Segmenter のテスト。"""

from collections.abc import Iterator

import pytest

from grepdiff.engine._segmenter import first_boundary, iter_segments
from grepdiff.models.segment import Segment

# =============================================================================
# テスト用バッファ
# =============================================================================

_TWO_FILES = (
    b"diff --git a/a.py b/a.py\n"
    b"@@ -1 +1 @@\n"
    b"-old\n"
    b"+new\n"
    b"diff --git a/b.py b/b.py\n"
    b"@@ -2 +2 @@\n"
    b"-x\n"
    b"+y\n"
)

_WITH_PREAMBLE = (
    b"From 1234 Mon Sep 17 00:00:00 2001\n"
    b"Subject: [PATCH] tweak\n"
    b"\n"
    b"diff --git a/a.py b/a.py\n"
    b"@@ -1 +1 @@\n"
    b"-a\n"
    b"+b\n"
)


def _slices(buffer: bytes, segments: list[Segment]) -> list[bytes]:
    return [bytes(s.view(buffer)) for s in segments]


# =============================================================================
# iter_segments — 基本動作
# =============================================================================


class TestIterSegmentsEmpty:
    """境界が存在しない場合は空のシーケンス。"""

    def test_empty_buffer(self) -> None:
        assert list(iter_segments(b"", "diff ")) == []

    def test_no_prefix_in_buffer(self) -> None:
        assert list(iter_segments(b"hello\nworld\n", "diff ")) == []

    def test_prefix_only_mid_line(self) -> None:
        """行の途中に現れる prefix は境界にならない。"""
        assert list(iter_segments(b"see diff a\nand @@ b\n", "diff ")) == []
        assert list(iter_segments(b"see diff a\nand @@ b\n", "@@ ")) == []

    def test_prefix_without_trailing_space(self) -> None:
        """"diff" の後に空白がない行は "diff " にマッチしない。"""
        assert list(iter_segments(b"diffstat\n", "diff ")) == []


class TestIterSegmentsBoundaries:
    """境界検出規則。"""

    def test_prefix_at_buffer_start_is_first_boundary(self) -> None:
        segments = list(iter_segments(_TWO_FILES, "diff "))
        assert segments[0].start == 0

    def test_splits_into_file_sections(self) -> None:
        segments = list(iter_segments(_TWO_FILES, "diff "))
        assert _slices(_TWO_FILES, segments) == [
            b"diff --git a/a.py b/a.py\n@@ -1 +1 @@\n-old\n+new\n",
            b"diff --git a/b.py b/b.py\n@@ -2 +2 @@\n-x\n+y\n",
        ]

    def test_segments_are_contiguous_and_ordered(self) -> None:
        segments = list(iter_segments(_TWO_FILES, "diff "))
        assert segments[0].end == segments[1].start
        assert segments[-1].end == len(_TWO_FILES)

    def test_leading_text_is_not_a_segment(self) -> None:
        segments = list(iter_segments(_WITH_PREAMBLE, "diff "))
        assert len(segments) == 1
        assert bytes(segments[0].view(_WITH_PREAMBLE)).startswith(b"diff --git")

    def test_last_segment_without_trailing_newline(self) -> None:
        buffer = b"@@ 1\na\n@@ 2\nb"
        assert _slices(buffer, list(iter_segments(buffer, "@@ "))) == [
            b"@@ 1\na\n",
            b"@@ 2\nb",
        ]

    def test_consecutive_marker_lines(self) -> None:
        buffer = b"@@ 1\n@@ 2\n"
        assert _slices(buffer, list(iter_segments(buffer, "@@ "))) == [
            b"@@ 1\n",
            b"@@ 2\n",
        ]

    def test_crlf_line_endings(self) -> None:
        buffer = b"@@ 1\r\na\r\n@@ 2\r\nb\r\n"
        assert _slices(buffer, list(iter_segments(buffer, "@@ "))) == [
            b"@@ 1\r\na\r\n",
            b"@@ 2\r\nb\r\n",
        ]

    def test_bytes_prefix_accepted(self) -> None:
        assert list(iter_segments(_TWO_FILES, b"diff ")) == list(
            iter_segments(_TWO_FILES, "diff ")
        )


class TestIterSegmentsSubRange:
    """区間指定によるファイルセクション内のハンク分割。"""

    def test_hunks_within_first_file_section(self) -> None:
        buffer = (
            b"diff a\n"
            b"@@ 1\n"
            b"+x\n"
            b"@@ 2\n"
            b"-y\n"
            b"diff b\n"
            b"@@ 3\n"
        )
        section = next(iter_segments(buffer, "diff "))
        hunks = list(iter_segments(buffer, "@@ ", section.start, section.end))
        assert hunks == [Segment(start=7, end=15), Segment(start=15, end=23)]

    def test_hunk_offsets_are_absolute(self) -> None:
        sections = list(iter_segments(_TWO_FILES, "diff "))
        second = sections[1]
        hunks = list(iter_segments(_TWO_FILES, "@@ ", second.start, second.end))
        assert len(hunks) == 1
        assert hunks[0].start > second.start
        assert hunks[0].end == second.end
        assert bytes(hunks[0].view(_TWO_FILES)) == b"@@ -2 +2 @@\n-x\n+y\n"

    def test_range_start_matching_prefix_is_boundary(self) -> None:
        buffer = b"xx\n@@ 1\na\n"
        assert list(iter_segments(buffer, "@@ ", 3)) == [Segment(start=3, end=10)]

    def test_marker_crossing_range_end_is_ignored(self) -> None:
        buffer = b"@@ 1\na\n@@ 2\n"
        assert list(iter_segments(buffer, "@@ ", 0, 9)) == [Segment(start=0, end=9)]


class TestIterSegmentsProperties:
    """先頭テキスト + 全 Segment の連結は元バッファに一致する。"""

    @pytest.mark.parametrize(
        "buffer",
        [
            b"",
            b"no markers at all\n",
            _TWO_FILES,
            _WITH_PREAMBLE,
            b"@@ only hunk\n",
            b"text\n@@ a\n@@ b\ntail",
        ],
    )
    @pytest.mark.parametrize("prefix", ["diff ", "@@ "])
    def test_leading_plus_segments_reconstructs_buffer(
        self, buffer: bytes, prefix: str
    ) -> None:
        segments = list(iter_segments(buffer, prefix))
        first = first_boundary(buffer, prefix)
        leading = buffer if first is None else buffer[:first]
        assert leading + b"".join(_slices(buffer, segments)) == buffer

    def test_is_lazy_iterator(self) -> None:
        assert isinstance(iter_segments(_TWO_FILES, "diff "), Iterator)

    def test_reentrant(self) -> None:
        """同じバッファに対する入れ子の呼び出しが互いに干渉しない。"""
        outer = iter_segments(_TWO_FILES, "diff ")
        counts = [
            len(list(iter_segments(_TWO_FILES, "@@ ", s.start, s.end))) for s in outer
        ]
        assert counts == [1, 1]


class TestIterSegmentsInvalidPrefix:
    def test_empty_prefix_raises(self) -> None:
        with pytest.raises(ValueError):
            list(iter_segments(b"abc", ""))


# =============================================================================
# first_boundary
# =============================================================================


class TestFirstBoundary:
    def test_at_start(self) -> None:
        assert first_boundary(_TWO_FILES, "diff ") == 0

    def test_after_preamble(self) -> None:
        expected = _WITH_PREAMBLE.index(b"diff --git")
        assert first_boundary(_WITH_PREAMBLE, "diff ") == expected

    def test_not_found(self) -> None:
        assert first_boundary(b"abc\n", "@@ ") is None

    def test_restricted_to_range(self) -> None:
        buffer = b"a\n@@ 1\n"
        assert first_boundary(buffer, "@@ ", 0, 2) is None
        assert first_boundary(buffer, "@@ ", 0) == 2
