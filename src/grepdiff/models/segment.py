"""Segment — バッファ上の連続区間を表すビュー。

ファイルセクション・ハンクセクションのどちらも Segment で表現する。
オフセットは常に元バッファ先頭からの絶対位置で、バイト列はコピーしない。
"""

from __future__ import annotations

from pydantic import Field, model_validator

from grepdiff.models._base import GrepdiffBaseModel


class Segment(GrepdiffBaseModel):
    """元バッファ内の半開区間 [start, end)。"""

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> Segment:
        if self.end < self.start:
            msg = f"Segment end ({self.end}) must not precede start ({self.start})"
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        return self.end - self.start

    def view(self, buffer: bytes) -> memoryview:
        """buffer 上の区間をコピーせずに memoryview として返す。"""
        return memoryview(buffer)[self.start : self.end]
