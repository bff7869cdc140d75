"""設定管理モジュール。

公開 API:
    resolve_config: 設定ファイルと CLI オプションから GrepdiffConfig を構築する。
"""

from grepdiff.config._resolver import resolve_config

__all__ = ["resolve_config"]
