"""ExitCode IntEnum と集約規則のテスト。"""

from enum import IntEnum

import pytest

from grepdiff.models.exit_code import ExitCode


class TestExitCodeValues:
    """ExitCode IntEnum の値を検証する。"""

    def test_matched_is_zero(self) -> None:
        assert ExitCode.MATCHED == 0

    def test_no_match_is_one(self) -> None:
        assert ExitCode.NO_MATCH == 1

    def test_error_is_two(self) -> None:
        assert ExitCode.ERROR == 2

    def test_has_three_members(self) -> None:
        assert len(ExitCode) == 3

    def test_is_int_enum_subclass(self) -> None:
        """sys.exit() にそのまま渡せる IntEnum である。"""
        assert issubclass(ExitCode, IntEnum)
        assert int(ExitCode.ERROR) == 2


class TestExitCodeMerge:
    """ExitCode.merge の単調な集約規則を検証する。"""

    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            (ExitCode.NO_MATCH, ExitCode.NO_MATCH, ExitCode.NO_MATCH),
            (ExitCode.NO_MATCH, ExitCode.MATCHED, ExitCode.MATCHED),
            (ExitCode.MATCHED, ExitCode.NO_MATCH, ExitCode.MATCHED),
            (ExitCode.MATCHED, ExitCode.MATCHED, ExitCode.MATCHED),
            (ExitCode.NO_MATCH, ExitCode.ERROR, ExitCode.ERROR),
            (ExitCode.MATCHED, ExitCode.ERROR, ExitCode.ERROR),
            (ExitCode.ERROR, ExitCode.MATCHED, ExitCode.ERROR),
            (ExitCode.ERROR, ExitCode.NO_MATCH, ExitCode.ERROR),
        ],
    )
    def test_merge_table(
        self, left: ExitCode, right: ExitCode, expected: ExitCode
    ) -> None:
        assert left.merge(right) is expected

    def test_error_is_never_downgraded(self) -> None:
        """一度 ERROR になった状態は後続のマッチで上書きされない。"""
        status = ExitCode.NO_MATCH.merge(ExitCode.ERROR)
        for code in (ExitCode.MATCHED, ExitCode.NO_MATCH, ExitCode.MATCHED):
            status = status.merge(code)
        assert status is ExitCode.ERROR

