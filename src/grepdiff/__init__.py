"""grepdiff — unified diff からパターンにマッチするハンクだけを抜き出す。

CLI エントリポイントは grepdiff.cli:main。
"""
