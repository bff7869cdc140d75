"""Segmenter — 行頭プレフィックスによるバッファの区間分割。

同じ関数をファイル単位（"diff "）とハンク単位（"@@ "）の 2 段階で使う。
ハンク分割はファイルセクションの区間 [start, end) を指定して同じバッファ上で
行うため、バイト列のコピーは発生しない。
"""

from __future__ import annotations

from collections.abc import Iterator

from grepdiff.models.segment import Segment

_NEWLINE = b"\n"


def _encode_prefix(prefix: str | bytes) -> bytes:
    encoded = prefix.encode("utf-8") if isinstance(prefix, str) else bytes(prefix)
    if not encoded:
        msg = "Segment prefix must not be empty"
        raise ValueError(msg)
    return encoded


def _resolve_end(buffer: bytes, end: int | None) -> int:
    return len(buffer) if end is None else end


def _next_boundary(buffer: bytes, marker: bytes, pos: int, end: int) -> int | None:
    """pos 以降で最初に "\\n" + prefix が現れる位置の行頭オフセットを返す。

    区間末尾をまたぐマッチは境界とみなさない。
    """
    found = buffer.find(_NEWLINE + marker, pos, end)
    if found < 0:
        return None
    return found + 1


def first_boundary(
    buffer: bytes,
    prefix: str | bytes,
    start: int = 0,
    end: int | None = None,
) -> int | None:
    """区間 [start, end) で prefix が行頭に現れる最初のオフセットを返す。

    start 位置そのものが prefix で始まる場合は start を返す。
    区間内で prefix が一度も行頭に現れなければ None。

    Raises:
        ValueError: prefix が空の場合。
    """
    marker = _encode_prefix(prefix)
    stop = _resolve_end(buffer, end)
    if buffer.startswith(marker, start, stop):
        return start
    return _next_boundary(buffer, marker, start, stop)


def iter_segments(
    buffer: bytes,
    prefix: str | bytes,
    start: int = 0,
    end: int | None = None,
) -> Iterator[Segment]:
    """区間 [start, end) を prefix で始まる行ごとの Segment に分割する。

    境界は prefix が区間先頭にあるか、改行の直後にある場合に限る。
    最初の境界より前のテキストはどの Segment にも含まれない。
    各 Segment は次の境界の直前で終わり、最後の Segment は end まで続く。

    Args:
        buffer: 分割対象のバイト列。
        prefix: 区切り行のプレフィックス。
        start: 区間の開始オフセット。
        end: 区間の終了オフセット（排他的）。None はバッファ末尾。

    Yields:
        入力順に並んだ、互いに重ならない Segment。

    Raises:
        ValueError: prefix が空の場合。
    """
    marker = _encode_prefix(prefix)
    stop = _resolve_end(buffer, end)
    current = first_boundary(buffer, marker, start, stop)
    while current is not None and current < stop:
        following = _next_boundary(buffer, marker, current, stop)
        segment_end = stop if following is None else following
        yield Segment(start=current, end=segment_end)
        current = following
