"""Tests for relpub.core.errors."""

from relpub.core.errors import ErrorCode


def test_codes_are_stable() -> None:
    assert int(ErrorCode.OK) == 0
    assert int(ErrorCode.USER_ERROR) == 1
    assert int(ErrorCode.ENV_ERROR) == 2
    assert int(ErrorCode.ASSET_MISSING) == 3
    assert int(ErrorCode.REMOTE_ERROR) == 4
    assert int(ErrorCode.RELEASE_ERROR) == 5


def test_tool_and_asset_missing_are_distinct() -> None:
    assert ErrorCode.ENV_ERROR != ErrorCode.ASSET_MISSING
