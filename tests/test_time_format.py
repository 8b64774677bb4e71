from __future__ import annotations

import pytest

from cbt_app.utils.time_format import format_remaining


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (7200, "02:00:00"),
        (3599, "00:59:59"),
        (61, "00:01:01"),
        (0, "00:00:00"),
        (-5, "00:00:00"),
    ],
)
def test_format_remaining(seconds, expected):
    assert format_remaining(seconds) == expected
