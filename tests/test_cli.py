"""Tests for the command line entry point."""

import logging

import matplotlib.pyplot as plt
import pytest

from lollipop_tlbx import cli
from lollipop_tlbx.utils.paths import get_dataset_path


@pytest.fixture(autouse=True)
def _keep_logging(monkeypatch):
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)


def test_default_sample(monkeypatch) -> None:
    shown = []
    monkeypatch.setattr(plt, "show", lambda: shown.append(True))

    assert cli.main([]) == 0
    assert shown == [True]


def test_no_show_with_hints() -> None:
    args = cli.build_arg_parser().parse_args(
        [str(get_dataset_path("team_scores")), "--top-value", "games", "--no-delta", "--no-show"],
    )
    chart = cli.build_chart(args)

    assert chart.roles.value_columns == ("games", "top_score")
    assert chart.geometry.delta_labels is None


def test_stems_use_all_numeric_columns() -> None:
    args = cli.build_arg_parser().parse_args(
        [str(get_dataset_path("monthly_sales")), "--stems", "--baseline", "100", "--no-show"],
    )
    chart = cli.build_chart(args)

    assert chart.roles.value_columns == ("north", "south", "west")
    assert chart.roles.category == "month"
    assert chart.geometry.baseline == 100.0


def test_resolution_error_exit_code(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("ERROR"):
        code = cli.main(["--category", "city", "--no-show"])

    assert code == 2
    assert "city" in caplog.text


def test_missing_file_exit_code(tmp_path) -> None:
    assert cli.main([str(tmp_path / "missing.csv"), "--no-show"]) == 2
