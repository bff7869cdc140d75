"""SourceReader — 入力ソースの読み込み。

各ソースはメモリ上に全体を読み込んでから処理する。
読み込み途中の I/O エラーでは、それまでに読めたバイト列を保持して返す。
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Final

from grepdiff.models._base import GrepdiffBaseModel

STDIN_SOURCE: Final[str] = "-"
"""標準入力を表すソース名。"""

STDIN_DISPLAY_NAME: Final[str] = "(standard input)"

_CHUNK_SIZE: Final[int] = 64 * 1024


class SourceData(GrepdiffBaseModel):
    """1 入力ソース分の読み込み結果。

    Attributes:
        name: 表示用のソース名。
        data: 読み込めたバイト列。error がある場合は途中までの内容。
        error: 読み込み途中で発生したエラーの説明。正常終了時は None。
    """

    name: str
    data: bytes
    error: str | None = None


class SourceOpenError(Exception):
    """入力ソースを開けなかった場合のエラー。

    エラーメッセージは "<name>: <reason>" 形式。
    """

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


def _describe(error: OSError) -> str:
    return error.strerror or str(error)


def read_stream(stream: BinaryIO, name: str) -> SourceData:
    """バイナリストリームを末尾まで読み込む。

    OSError 発生時は読み込みを打ち切り、それまでの内容と
    エラー説明を SourceData に格納して返す。

    Args:
        stream: 読み込み対象のバイナリストリーム。
        name: 表示用のソース名。

    Returns:
        読み込み結果。
    """
    buffer = bytearray()
    try:
        while chunk := stream.read(_CHUNK_SIZE):
            buffer += chunk
    except OSError as e:
        return SourceData(name=name, data=bytes(buffer), error=_describe(e))
    return SourceData(name=name, data=bytes(buffer))


def read_source(source: str, stdin: BinaryIO) -> SourceData:
    """ソース名に対応する入力を読み込む。

    "-" は標準入力を表す。それ以外はファイルパスとして開く。

    Args:
        source: ソース名（ファイルパスまたは "-"）。
        stdin: 標準入力のバイナリストリーム。

    Returns:
        読み込み結果。

    Raises:
        SourceOpenError: ファイルを開けなかった場合。
    """
    if source == STDIN_SOURCE:
        return read_stream(stdin, STDIN_DISPLAY_NAME)
    try:
        f = Path(source).open("rb")
    except OSError as e:
        raise SourceOpenError(source, _describe(e)) from e
    with f:
        return read_stream(f, source)
