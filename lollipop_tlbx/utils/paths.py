from pathlib import Path
from typing import Literal


__all__ = ["get_data_dir", "get_dataset_path"]


_DATASET_MAP: dict[str, str] = {
    "team_scores": "team_scores.csv",
    "monthly_sales": "monthly_sales.csv",
}


def get_data_dir() -> Path:
    """Locate the ``_data`` directory holding the bundled sample CSVs.

    Returns:
        Path to ``_data`` at the repository root
    """
    data_dir = (Path(__file__).parents[2] / "_data").resolve()
    assert data_dir.exists(), f"Sample data directory not found at {data_dir}"
    return data_dir


def get_dataset_path(filename: Literal["team_scores", "monthly_sales"] | str) -> Path:  # noqa: PYI051
    """Resolve a bundled sample chart dataset.

    Args:
        filename: ``"team_scores"`` (two players per team, the default dumbbell
            sample), ``"monthly_sales"`` (three regions per month, a stem
            sample) or a file name inside ``_data``

    Returns:
        Path to the CSV file
    """
    ds_path = get_data_dir() / _DATASET_MAP.get(filename, filename)
    assert ds_path.exists(), f"Sample dataset '{filename}' not found at {ds_path}"
    return ds_path
