"""設定管理モデル。"""

from __future__ import annotations

from typing import Final

from pydantic import Field, StrictBool, field_validator

from grepdiff.models._base import GrepdiffBaseModel

DEFAULT_FILE_MARKER: Final[str] = "diff "
"""ファイルセクションの開始行プレフィックス。"""

DEFAULT_HUNK_MARKER: Final[str] = "@@ "
"""ハンクセクションの開始行プレフィックス。"""


class GrepdiffConfig(GrepdiffBaseModel):
    """全設定項目を統合した不変モデル。

    デフォルト値のみで有効なインスタンスを構築可能。
    """

    # セクション区切り
    file_marker: str = Field(default=DEFAULT_FILE_MARKER, min_length=1)
    hunk_marker: str = Field(default=DEFAULT_HUNK_MARKER, min_length=1)

    # マッチング設定
    ignore_case: StrictBool = False
    multiline: StrictBool = True

    @field_validator("file_marker", "hunk_marker")
    @classmethod
    def _reject_line_breaks(cls, v: str) -> str:
        """マーカーは行頭プレフィックスのため改行を含められない。"""
        if "\n" in v or "\r" in v:
            msg = "Section marker must not contain line breaks"
            raise ValueError(msg)
        return v
