"""grepdiff ドメインモデルパッケージ。"""

from grepdiff.models._base import GrepdiffBaseModel
from grepdiff.models.config import (
    DEFAULT_FILE_MARKER,
    DEFAULT_HUNK_MARKER,
    GrepdiffConfig,
)
from grepdiff.models.exit_code import ExitCode
from grepdiff.models.segment import Segment

__all__ = [
    "DEFAULT_FILE_MARKER",
    "DEFAULT_HUNK_MARKER",
    "ExitCode",
    "GrepdiffBaseModel",
    "GrepdiffConfig",
    "Segment",
]
