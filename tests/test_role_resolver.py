"""Tests for column role resolution."""

import numpy as np
import pandas as pd
import pytest

from lollipop_tlbx.analysis.role_resolver import (
    DumbbellMode,
    RoleHints,
    RoleResolver,
    StemMode,
    resolve_classic_roles,
    resolve_roles,
)
from lollipop_tlbx.data import as_view
from lollipop_tlbx.errors import (
    ColumnIndexOutOfRange,
    InvalidDatasetShape,
    NotEnoughNumericColumns,
    RoleResolutionError,
    UnknownColumnName,
    ValueColumnNotNumeric,
)


class TestDumbbellInference:
    def test_defaults_on_sample(self, team_scores_df: pd.DataFrame) -> None:
        roles = resolve_roles(team_scores_df)

        assert roles.category == "team"
        assert roles.mode == DumbbellMode(
            top_value="top_score",
            second_value="second_score",
            top_name="top_player",
            second_name="second_player",
        )
        assert roles.category_index == 0
        assert roles.value_indices == (2, 4)
        assert roles.name_indices == (1, 3)
        assert roles.column_count == 6
        assert roles.is_dumbbell
        assert roles.n_series == 2

    def test_values_ranked_by_sum(self) -> None:
        df = pd.DataFrame(
            {
                "label": ["x", "y"],
                "small": [1, 2],
                "large": [50, 60],
                "medium": [10, 10],
                "n1": ["p", "q"],
                "n2": ["r", "s"],
            },
        )
        roles = resolve_roles(df)

        assert roles.value_columns == ("large", "medium")

    def test_sum_ties_keep_column_order(self) -> None:
        df = pd.DataFrame({"label": ["x", "y"], "a": [1, 1], "b": [2, 0], "c": [0, 2]})
        roles = resolve_roles(df)

        assert roles.value_columns == ("a", "b")

    def test_category_falls_back_to_first_column(self) -> None:
        df = pd.DataFrame({"a": [1, 2], "b": [3, 4], "c": [5, 6]})
        roles = resolve_roles(df)

        assert roles.category == "a"
        assert roles.mode.name_columns == ("b", "c")
        # category column still takes part in the value ranking
        assert roles.value_columns == ("c", "b")

    def test_categorical_and_temporal_are_text_like(self) -> None:
        df = pd.DataFrame(
            {
                "score": [1.0, 2.0],
                "when": pd.to_datetime(["2024-01-01", "2024-02-01"]),
                "group": pd.Series(["a", "b"], dtype="category"),
                "other": [3.0, 4.0],
            },
        )
        roles = resolve_roles(df)

        assert roles.category == "when"
        assert roles.mode.name_columns == ("group", "score")

    def test_boolean_columns_are_numeric(self) -> None:
        df = pd.DataFrame({"label": ["x", "y"], "flag": [True, True], "score": [0.5, 0.5]})
        roles = resolve_roles(df)

        assert roles.value_columns == ("flag", "score")


class TestLowColumnCounts:
    def test_single_numeric_column(self) -> None:
        with pytest.raises(NotEnoughNumericColumns):
            resolve_roles(pd.DataFrame({"score": [1, 2]}))

    def test_text_and_one_numeric_column(self) -> None:
        with pytest.raises(NotEnoughNumericColumns) as exc_info:
            resolve_roles(pd.DataFrame({"team": ["x", "y"], "score": [1, 2]}))

        assert exc_info.value.context["numeric_columns"] == ["score"]

    def test_two_numeric_columns_cannot_fill_names(self) -> None:
        with pytest.raises(RoleResolutionError) as exc_info:
            resolve_roles(pd.DataFrame({"a": [1], "b": [2]}))

        assert type(exc_info.value) is RoleResolutionError
        assert exc_info.value.context["role"] == "second_name"

    def test_three_columns_pad_names_from_values(self) -> None:
        df = pd.DataFrame({"label": ["x", "y"], "a": [1, 2], "b": [3, 4]})
        roles = resolve_roles(df)

        assert roles.category == "label"
        assert roles.name_indices == (1, 2)
        assert roles.value_columns == ("b", "a")

    def test_three_columns_one_numeric(self) -> None:
        df = pd.DataFrame({"label": ["x", "y"], "name": ["p", "q"], "v": [1, 2]})

        with pytest.raises(NotEnoughNumericColumns):
            resolve_roles(df)

    def test_names_padded_from_remaining_columns(self) -> None:
        df = pd.DataFrame({"label": ["x", "y"], "a": [1, 2], "name": ["p", "q"], "b": [3, 4]})
        roles = resolve_roles(df)

        assert roles.mode.name_columns == ("name", "a")

    def test_one_numeric_with_many_text_columns(self) -> None:
        df = pd.DataFrame({"team": ["x"], "p1": ["a"], "p2": ["b"], "score": [1]})

        with pytest.raises(NotEnoughNumericColumns) as exc_info:
            resolve_roles(df)

        assert exc_info.value.context["numeric_columns"] == ["score"]

    def test_empty_dataset(self) -> None:
        with pytest.raises(InvalidDatasetShape):
            resolve_roles(pd.DataFrame({"a": []}))


class TestHints:
    def test_name_hints(self, team_scores_df: pd.DataFrame) -> None:
        roles = resolve_roles(team_scores_df, top_name="second_player", second_name="team")

        assert roles.mode.name_columns == ("second_player", "team")

    def test_hinted_name_not_reused_for_inferred_slot(self) -> None:
        df = pd.DataFrame({"team": ["x"], "a": ["p"], "b": ["q"], "v1": [1], "v2": [2]})

        assert resolve_roles(df, top_name="b").mode.name_columns == ("b", "a")
        assert resolve_roles(df, second_name="a").mode.name_columns == ("b", "a")

    def test_positional_hints(self, team_scores_df: pd.DataFrame) -> None:
        roles = resolve_roles(team_scores_df, category=0, top_value=4, second_value=np.int64(2))

        assert roles.category == "team"
        assert roles.value_columns == ("second_score", "top_score")
        assert roles.value_indices == (4, 2)

    def test_only_top_value_hint(self, team_scores_df: pd.DataFrame) -> None:
        roles = resolve_roles(team_scores_df, top_value="second_score")

        assert roles.value_columns == ("second_score", "top_score")

    def test_only_second_value_hint(self, team_scores_df: pd.DataFrame) -> None:
        roles = resolve_roles(team_scores_df, second_value="top_score")

        assert roles.value_columns == ("second_score", "top_score")

    def test_identical_value_hints(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(RoleResolutionError, match="must differ"):
            resolve_roles(team_scores_df, top_value="games", second_value=5)

    @pytest.mark.parametrize("hint", [6, -1, 100])
    def test_position_out_of_range(self, team_scores_df: pd.DataFrame, hint: int) -> None:
        with pytest.raises(ColumnIndexOutOfRange) as exc_info:
            resolve_roles(team_scores_df, top_value=hint)

        assert exc_info.value.context["column_count"] == 6

    def test_unknown_category(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(UnknownColumnName) as exc_info:
            resolve_roles(team_scores_df, category="city")

        assert exc_info.value.context == {"role": "category", "hint": "city"}

    def test_unknown_value_column(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(UnknownColumnName):
            resolve_roles(team_scores_df, second_value="assists")

    def test_value_column_not_numeric(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(ValueColumnNotNumeric):
            resolve_roles(team_scores_df, top_value="top_player")

    @pytest.mark.parametrize("hint", [True, ["team"]])
    def test_invalid_hint_type(self, team_scores_df: pd.DataFrame, hint: object) -> None:
        with pytest.raises(RoleResolutionError):
            resolve_roles(team_scores_df, category=hint)

    def test_errors_are_value_errors(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(ValueError):
            resolve_roles(team_scores_df, category="city")


class TestClassicResolution:
    def test_two_values_give_dumbbell(self, team_scores_df: pd.DataFrame) -> None:
        roles = resolve_classic_roles(team_scores_df, category="team", values=["top_score", "second_score"])

        assert roles.mode == DumbbellMode(top_value="top_score", second_value="second_score")
        assert roles.mode.name_columns is None
        assert roles.name_indices is None

    def test_other_counts_give_stems(self, team_scores_df: pd.DataFrame) -> None:
        roles = resolve_classic_roles(team_scores_df, category="team", values=["games", "top_score", "second_score"])

        assert roles.mode == StemMode(value_columns=("games", "top_score", "second_score"))
        assert roles.value_indices == (5, 2, 4)
        assert not roles.is_dumbbell

    def test_values_from_index_and_array(self, team_scores_df: pd.DataFrame) -> None:
        from_index = resolve_classic_roles(team_scores_df, category="team", values=team_scores_df.columns[[2, 4, 5]])
        from_array = resolve_classic_roles(team_scores_df, category="team", values=np.array(["games", "top_score"]))

        assert from_index.mode == StemMode(value_columns=("top_score", "second_score", "games"))
        assert from_array.value_columns == ("games", "top_score")

    def test_single_value_scalar(self, team_scores_df: pd.DataFrame) -> None:
        roles = resolve_classic_roles(team_scores_df, category=0, values="games")

        assert roles.mode == StemMode(value_columns=("games",))
        assert roles.category == "team"

    def test_duplicate_values(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(RoleResolutionError, match="distinct"):
            resolve_classic_roles(team_scores_df, category="team", values=["games", 5])

    def test_missing_category(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(RoleResolutionError):
            resolve_classic_roles(team_scores_df, category=None, values=["games"])

    def test_empty_values(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(RoleResolutionError):
            resolve_classic_roles(team_scores_df, category="team", values=[])

    def test_non_numeric_value(self, team_scores_df: pd.DataFrame) -> None:
        with pytest.raises(ValueColumnNotNumeric):
            resolve_classic_roles(team_scores_df, category="team", values=["games", "top_player"])


class TestResolverLifecycle:
    def test_result_before_fit(self, team_scores_df: pd.DataFrame) -> None:
        resolver = RoleResolver(as_view(team_scores_df))

        with pytest.raises(ValueError, match="Must call fit"):
            resolver.result()

    def test_fit_returns_self(self, team_scores_df: pd.DataFrame) -> None:
        resolver = RoleResolver(as_view(team_scores_df), RoleHints(category="team"))

        assert resolver.fit() is resolver

    def test_default_names_helper(self, team_scores_df: pd.DataFrame) -> None:
        resolver = RoleResolver(as_view(team_scores_df))

        assert resolver.default_names("team") == ["top_player", "second_player"]
        assert resolver.default_category() == "team"
        assert resolver.rank_value_columns() == ["top_score", "second_score", "games"]
