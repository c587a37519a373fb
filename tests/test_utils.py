"""
Formatting and debug logging helpers
"""

import pytest

from palette_gen import utils
from palette_gen.utils import (
    format_seconds_compact,
    key_value_pairs_to_string,
    print_config_line,
)


def test_config_line_goes_to_debug(capsys):
    print_config_line("kmeans", [("Samples", 2310), ("High-res", False), ("Step", 0.25)])
    assert capsys.readouterr().out == "[debug] [kmeans] Samples: 2,310  High-res: off  Step: 0.25\n"


def test_no_plain_log_helper():
    assert not hasattr(utils, "log")
    assert "log" not in utils.__all__


@pytest.mark.parametrize(
    "seconds, text",
    [(0.0123, "12.3ms"), (2.5, "2.500s"), (125.0, "2m 5.0s")],
)
def test_format_seconds_compact(seconds, text):
    assert format_seconds_compact(seconds) == text


def test_key_value_pairs_custom_separators():
    assert key_value_pairs_to_string([("a", True), ("b", 3)], sep=", ", eq="=") == "a=on, b=3"
