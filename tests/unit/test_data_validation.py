"""Unit tests for dataset validation."""

import pandas as pd
import pytest

from consort.content.template import REFERENCE_TEMPLATE
from consort.core.errors import (
    FlowConsistencyError,
    InvalidDatasetError,
    UnknownLayerReference,
)
from consort.data.sample import make_sample_dataset
from consort.data.validation import validate_dataset


def make_rows(**overrides) -> pd.DataFrame:
    """Helper to build a two-subject frame, overriding whole columns."""
    data = {
        "arm": [2, 3],
        "subgroup": [1, 3],
        "exclusion_reason": [0, 2],
        "analysed": [1, 0],
    }
    data.update(overrides)
    return pd.DataFrame(data)


class TestValidateDataset:
    """Tests for validate_dataset."""

    def test_sample_is_valid(self) -> None:
        """Test the sample cohort passes."""
        validate_dataset(make_sample_dataset(), REFERENCE_TEMPLATE, column_count=4)

    def test_empty_is_valid(self) -> None:
        """Test an empty cohort passes."""
        validate_dataset(make_sample_dataset(0), REFERENCE_TEMPLATE, column_count=4)

    def test_missing_field(self) -> None:
        """Test a missing field raises UnknownLayerReference."""
        with pytest.raises(UnknownLayerReference):
            validate_dataset(make_rows().drop(columns=["arm"]), REFERENCE_TEMPLATE)

    def test_present_without_prior_layer(self) -> None:
        """Test a subgroup without an arm breaks the flow."""
        with pytest.raises(FlowConsistencyError, match="layer 3"):
            validate_dataset(make_rows(arm=[0, 3]), REFERENCE_TEMPLATE)

    def test_analysed_without_subgroup(self) -> None:
        """Test an analysed subject must have a subgroup."""
        with pytest.raises(FlowConsistencyError, match="layer 5"):
            validate_dataset(make_rows(subgroup=[0, 3], arm=[2, 3]), REFERENCE_TEMPLATE)

    def test_excluded_and_analysed(self) -> None:
        """Test a subject cannot be excluded and analysed."""
        with pytest.raises(FlowConsistencyError, match="both excluded"):
            validate_dataset(make_rows(exclusion_reason=[1, 2]), REFERENCE_TEMPLATE)

    def test_excluded_without_source(self) -> None:
        """Test an excluded subject needs a prior-layer column."""
        df = make_rows(arm=[2, 0], subgroup=[1, 0])
        with pytest.raises(FlowConsistencyError, match="no position"):
            validate_dataset(df, REFERENCE_TEMPLATE)

    def test_analysed_outside_own_subgroup(self) -> None:
        """Test an analysed column must match the subject's subgroup column."""
        with pytest.raises(FlowConsistencyError, match="did not come from column 4 at layer 3"):
            validate_dataset(make_rows(analysed=[4, 0]), REFERENCE_TEMPLATE)

    def test_subgroup_outside_own_arm(self) -> None:
        """Test subgroups 3-4 only take subjects from arm 3."""
        with pytest.raises(FlowConsistencyError, match="did not come from column 3 at layer 2"):
            validate_dataset(make_rows(subgroup=[4, 3], analysed=[0, 0]), REFERENCE_TEMPLATE)

    def test_empty_object_columns_are_valid(self) -> None:
        """Test a frame with headers only passes whatever its dtypes."""
        df = pd.DataFrame(columns=["arm", "subgroup", "exclusion_reason", "analysed"])
        validate_dataset(df, REFERENCE_TEMPLATE, column_count=4)

    def test_flow_error_is_dataset_error(self) -> None:
        """Test FlowConsistencyError is an InvalidDatasetError."""
        with pytest.raises(InvalidDatasetError):
            validate_dataset(make_rows(arm=[0, 3]), REFERENCE_TEMPLATE)

    def test_unknown_reason_code(self) -> None:
        """Test reason codes must be known."""
        with pytest.raises(InvalidDatasetError, match="reason"):
            validate_dataset(make_rows(exclusion_reason=[0, 9]), REFERENCE_TEMPLATE)

    def test_column_out_of_range(self) -> None:
        """Test positions above the column count are rejected."""
        with pytest.raises(InvalidDatasetError, match="outside 0..4"):
            validate_dataset(make_rows(subgroup=[1, 5]), REFERENCE_TEMPLATE, column_count=4)

    def test_non_integer_positions(self) -> None:
        """Test fractional positions are rejected."""
        with pytest.raises(InvalidDatasetError, match="non-integer"):
            validate_dataset(make_rows(arm=[2.5, 3]), REFERENCE_TEMPLATE)

    def test_non_numeric_positions(self) -> None:
        """Test text positions are rejected."""
        with pytest.raises(InvalidDatasetError, match="numeric"):
            validate_dataset(make_rows(arm=["two", "three"]), REFERENCE_TEMPLATE)

    def test_missing_values_are_absent(self) -> None:
        """Test NaN is read as not present."""
        df = make_rows(arm=[2, None], subgroup=[1, None], exclusion_reason=[0, None], analysed=[1, None])
        validate_dataset(df, REFERENCE_TEMPLATE, column_count=4)
