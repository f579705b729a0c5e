"""Test configuration for the lollipop toolbox."""

from pathlib import Path
import sys
from types import SimpleNamespace

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
import pytest


matplotlib.use("Agg")

# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class RecordingSurface:
    """Rendering surface that records every call instead of drawing."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[tuple[str, tuple, dict]] = []
        self.fail_on = fail_on
        self.on_activate = None
        self.closed = False

    def _record(self, method: str, *args, **kwargs) -> SimpleNamespace:
        if method == self.fail_on:
            raise RuntimeError(f"{method} failed")
        self.calls.append((method, args, kwargs))
        return SimpleNamespace(method=method, args=args, kwargs=kwargs)

    def add_connector(self, x, y, *, color, width, visible):
        return self._record("add_connector", x, y, color=color, width=width, visible=visible)

    def add_markers(self, x, y, *, size, color, marker, label):
        return self._record("add_markers", x, y, size=size, color=color, marker=marker, label=label)

    def add_stem(self, x, y, *, baseline, color, marker_size, label):
        return self._record("add_stem", x, y, baseline=baseline, color=color, marker_size=marker_size, label=label)

    def add_reference_line(self, y):
        return self._record("add_reference_line", y)

    def add_text(self, x, y, text, *, ha="center", va="center"):
        return self._record("add_text", x, y, text, ha=ha, va=va)

    def add_legend(self, handles, labels, on_activate):
        self.on_activate = on_activate
        return self._record("add_legend", list(handles), list(labels))

    def set_connector_style(self, handle, **kwargs):
        self._record("set_connector_style", handle, **kwargs)

    def set_series_style(self, handle, **kwargs):
        self._record("set_series_style", handle, **kwargs)

    def set_legend_labels(self, legend, labels):
        self._record("set_legend_labels", legend, tuple(labels))

    def set_category_ticks(self, positions, labels):
        self._record("set_category_ticks", positions, tuple(labels))

    def set_limits(self, x_limits, y_limits):
        self._record("set_limits", x_limits, y_limits)

    def decorate(self, *, xlabel, ylabel, title):
        self._record("decorate", xlabel=xlabel, ylabel=ylabel, title=title)

    def refresh(self):
        self._record("refresh")

    def close(self):
        self.closed = True

    def named(self, method: str) -> list[tuple[str, tuple, dict]]:
        return [call for call in self.calls if call[0] == method]

    def reset(self) -> None:
        self.calls.clear()


@pytest.fixture
def recording_surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture(scope="session")
def team_scores_dataset():
    """Load the bundled team scores sample once per test session."""
    from lollipop_tlbx.data import TabularDataset

    return TabularDataset.from_csv()


@pytest.fixture
def team_scores_df(team_scores_dataset) -> pd.DataFrame:
    return team_scores_dataset.df.copy()


@pytest.fixture
def three_row_df() -> pd.DataFrame:
    """Three rows with a win, a loss and a tie for the top series."""
    return pd.DataFrame(
        {
            "label": ["a", "b", "c"],
            "top_name": ["A1", "B1", "C1"],
            "second_name": ["A2", "B2", "C2"],
            "top": [5.0, 2.0, 9.0],
            "second": [3.0, 8.0, 9.0],
        },
    )


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")
