"""ExitCode — 終了コードの定義と単調な集約規則。"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """プロセス終了コード。grep 互換。

    MATCHED: 1 つ以上のハンクがマッチした。
    NO_MATCH: エラーなしで処理を完了し、マッチが 0 件だった。
    ERROR: 使用法・パターン・入力ソースのいずれかでエラーが発生した。
    """

    MATCHED = 0
    NO_MATCH = 1
    ERROR = 2

    def merge(self, other: ExitCode) -> ExitCode:
        """2 つの終了コードを集約する。

        ERROR > MATCHED > NO_MATCH の順で優先され、一度 ERROR になった
        状態は以降どの値と集約しても ERROR のまま維持される。

        Args:
            other: 集約対象の終了コード。

        Returns:
            集約後の終了コード。
        """
        if ExitCode.ERROR in (self, other):
            return ExitCode.ERROR
        if ExitCode.MATCHED in (self, other):
            return ExitCode.MATCHED
        return ExitCode.NO_MATCH

