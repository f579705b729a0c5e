"""Tests for PlottingConfig."""

import matplotlib as mpl

from lollipop_tlbx.utils.plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


def test_apply_restores_rc_params() -> None:
    before = mpl.rcParams["axes.titlesize"]
    cfg = PlottingConfig(title_size=31)

    with cfg.apply():
        assert mpl.rcParams["axes.titlesize"] == 31

    assert mpl.rcParams["axes.titlesize"] == before


def test_defaults() -> None:
    assert DEFAULT_PLOT_CFG.palette == "tab10"
    assert DEFAULT_PLOT_CFG.tick_rotation == 45
