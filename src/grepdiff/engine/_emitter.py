"""Selective re-emitter — マッチしたハンクとそのファイルヘッダーのみを出力する。

ハンクがマッチの単位であり、ファイルヘッダーは各ファイルセクションで
最初にマッチしたハンクの直前に一度だけ出力する。
出力は元バッファの memoryview スライスをそのまま書き込み、整形は行わない。
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from pydantic import Field

from grepdiff.engine._matcher import HunkMatcher
from grepdiff.engine._segmenter import first_boundary, iter_segments
from grepdiff.models._base import GrepdiffBaseModel
from grepdiff.models.config import DEFAULT_FILE_MARKER, DEFAULT_HUNK_MARKER
from grepdiff.models.exit_code import ExitCode
from grepdiff.models.segment import Segment

logger = logging.getLogger(__name__)


class Sink(Protocol):
    """出力先。write() に bytes-like を受け取れればよい。"""

    def write(self, data: memoryview, /) -> object: ...


class HeaderState(Enum):
    """ファイルセクション単位のヘッダー出力状態。PENDING → EMITTED のみ遷移する。"""

    PENDING = "pending"
    EMITTED = "emitted"


class GrepResult(GrepdiffBaseModel):
    """1 バッファ分の処理結果。

    Attributes:
        status: MATCHED または NO_MATCH。I/O エラーは呼び出し側で集約する。
        file_sections: 処理したファイルセクション数（暗黙セクションを含む）。
        matched_hunks: マッチしたハンク数。
        emitted_headers: 出力したヘッダー数。
    """

    status: ExitCode = ExitCode.NO_MATCH
    file_sections: int = Field(default=0, ge=0)
    matched_hunks: int = Field(default=0, ge=0)
    emitted_headers: int = Field(default=0, ge=0)


def _file_sections(buffer: bytes, file_marker: str) -> list[tuple[Segment, bool]]:
    """ファイルセクションを (区間, 暗黙セクションか) の組で列挙する。

    最初のファイルマーカーより前のテキストは暗黙のファイルセクションとして扱う。
    ファイルマーカーが一度も現れない場合はバッファ全体が 1 つの暗黙セクションになる。
    """
    first = first_boundary(buffer, file_marker)
    leading_end = len(buffer) if first is None else first
    sections: list[tuple[Segment, bool]] = []
    if leading_end > 0:
        sections.append((Segment(start=0, end=leading_end), True))
    if first is not None:
        sections.extend((s, False) for s in iter_segments(buffer, file_marker))
    return sections


def _grep_section(
    buffer: bytes,
    section: Segment,
    implicit: bool,
    matcher: HunkMatcher,
    sink: Sink,
    hunk_marker: str,
) -> tuple[int, bool]:
    """1 ファイルセクションを処理し、(マッチしたハンク数, ヘッダー出力有無) を返す。

    暗黙セクションのヘッダーは空とし、最初のハンクより前のテキストは出力しない。
    """
    hunk_start = first_boundary(buffer, hunk_marker, section.start, section.end)
    if hunk_start is None:
        return 0, False

    header_start = hunk_start if implicit else section.start
    header = Segment(start=header_start, end=hunk_start)
    state = HeaderState.PENDING
    matched = 0
    for hunk in iter_segments(buffer, hunk_marker, section.start, section.end):
        hunk_bytes = hunk.view(buffer)
        if not matcher.test(hunk_bytes):
            continue
        if state is HeaderState.PENDING:
            if len(header):
                sink.write(header.view(buffer))
            state = HeaderState.EMITTED
        sink.write(hunk_bytes)
        matched += 1
    return matched, state is HeaderState.EMITTED and len(header) > 0


def grep_diff(
    buffer: bytes,
    matcher: HunkMatcher,
    sink: Sink,
    *,
    file_marker: str = DEFAULT_FILE_MARKER,
    hunk_marker: str = DEFAULT_HUNK_MARKER,
) -> GrepResult:
    """バッファ内のハンクを matcher で判定し、マッチ分を sink に書き出す。

    各ファイルセクションについて、最初の hunk_marker 行より前をヘッダーとし、
    最初にマッチしたハンクの直前に一度だけ書き出す。
    最初のファイルマーカーより前のハンクはヘッダーなしで書き出す。
    マッチしないハンクは出力しない。ハンクを含まないセクションは判定対象外。

    Args:
        buffer: 1 入力ソース分の全内容。
        matcher: コンパイル済みの HunkMatcher。
        sink: 出力先（バイナリストリーム）。
        file_marker: ファイルセクションの行頭プレフィックス。
        hunk_marker: ハンクセクションの行頭プレフィックス。

    Returns:
        マッチ状況を表す GrepResult。
    """
    sections = _file_sections(buffer, file_marker)
    matched_hunks = 0
    emitted_headers = 0
    for section, implicit in sections:
        matched, emitted = _grep_section(
            buffer, section, implicit, matcher, sink, hunk_marker
        )
        matched_hunks += matched
        emitted_headers += int(emitted)

    logger.debug(
        "scanned %d file section(s), %d hunk(s) matched",
        len(sections),
        matched_hunks,
    )
    return GrepResult(
        status=ExitCode.MATCHED if matched_hunks else ExitCode.NO_MATCH,
        file_sections=len(sections),
        matched_hunks=matched_hunks,
        emitted_headers=emitted_headers,
    )
