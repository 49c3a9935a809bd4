"""
Unit tests for KPI tests: validation, evaluation and formatting.
"""

from datetime import datetime

import pytest

from spark_helper.monitoring.kpi import (
    Comparator,
    KpiTest,
    Unit,
    build_kpi_test,
)
from spark_helper.validation import InvalidParameterError, ValidationError


@pytest.mark.unit
class TestKpiConstruction:
    """Test cases for KpiTest construction and validation."""

    def test_invalid_comparator_raises(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            KpiTest("pctOfWhatever", 0.06, "bogus", 0.1, "pct")

        assert str(exc_info.value) == (
            'The comparator can only be "greater-than", "less-than" or "equal-to", '
            'but you used: "bogus".'
        )
        assert exc_info.value.field_name == "comparator"
        assert exc_info.value.value == "bogus"

    def test_invalid_comparator_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            KpiTest("someNbr", 1.0, "superior to", 0.0, "nbr")

    def test_comparator_match_is_case_sensitive(self):
        with pytest.raises(InvalidParameterError):
            KpiTest("someNbr", 1.0, "Greater-Than", 0.0, "nbr")

    def test_invalid_unit_raises(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            KpiTest("someNbr", 1.0, "equal-to", 1.0, "kg")

        assert '"pct"' in str(exc_info.value)
        assert '"nbr"' in str(exc_info.value)
        assert '"kg"' in str(exc_info.value)

    def test_enum_members_are_accepted(self):
        test = KpiTest("someNbr", 3, Comparator.LESS_THAN, 5, Unit.RAW_NUMBER)

        assert test.comparator is Comparator.LESS_THAN
        assert test.unit is Unit.RAW_NUMBER
        assert test.value == 3.0
        assert isinstance(test.value, float)

    def test_kpi_test_is_immutable(self):
        test = KpiTest("someNbr", 3, "less-than", 5, "nbr")

        with pytest.raises(AttributeError):
            test.value = 10


@pytest.mark.unit
class TestKpiEvaluation:
    """Test cases for KpiTest.evaluate()."""

    @pytest.mark.parametrize(
        "value, comparator, threshold, expected",
        [
            (0.06, "less-than", 0.1, True),
            (0.27, "greater-than", 0.3, False),
            (1235, "equal-to", 1235, True),
            (55e6, "greater-than", 50e6, True),
            (0.1, "less-than", 0.1, False),
            (0.3, "greater-than", 0.3, False),
            (1234, "equal-to", 1235, False),
        ],
    )
    def test_evaluate(self, value, comparator, threshold, expected):
        assert KpiTest("kpi", value, comparator, threshold, "nbr").evaluate() is expected


@pytest.mark.unit
class TestKpiFormatting:
    """Test cases for the report block of a KPI."""

    def test_format_percentage(self):
        test = KpiTest("pctOfWhatever", 0.06, "less-than", 0.1, "pct")

        assert test.format() == (
            "\tKPI: pctOfWhatever\n"
            "\t\tValue: 0.06%\n"
            "\t\tMust be less than 0.1%\n"
            "\t\tValidated: true"
        )

    def test_format_raw_number(self):
        test = KpiTest("someNbr", 1235, "equal-to", 1235, "nbr")

        assert test.format() == (
            "\tKPI: someNbr\n"
            "\t\tValue: 1235.0\n"
            "\t\tMust be equal to 1235.0\n"
            "\t\tValidated: true"
        )

    def test_format_failed_kpi(self):
        test = KpiTest("pctOfSomethingElse", 0.27, "greater-than", 0.3, "pct")

        lines = test.format().split("\n")

        assert lines[2] == "\t\tMust be greater than 0.3%"
        assert lines[3] == "\t\tValidated: false"

    def test_to_result(self):
        evaluated_at = datetime(2017, 3, 27, 10, 30)
        test = KpiTest("pctOfWhatever", 0.06, "less-than", 0.1, "pct")

        result = test.to_result("Tests for whatever", evaluated_at)

        assert result.evaluated_at == evaluated_at
        assert result.suite == "Tests for whatever"
        assert result.comparator == "less-than"
        assert result.unit == "pct"
        assert result.validated is True


@pytest.mark.unit
class TestBuildKpiTest:
    """Test cases for the non-raising KPI factory."""

    def test_valid_definition(self):
        result = build_kpi_test("someNbr", 1235, "equal-to", 1235, "nbr")

        assert result.ok
        assert result.error is None
        assert result.test.evaluate()

    def test_invalid_definition(self):
        result = build_kpi_test("someNbr", 1235, "bogus", 1235, "nbr")

        assert not result.ok
        assert result.test is None
        assert isinstance(result.error, InvalidParameterError)
        assert '"bogus"' in str(result.error)

    def test_invalid_value(self):
        result = build_kpi_test("Nbr of records", "n/a", "greater-than", 10, "nbr")

        assert not result.ok
        assert result.test is None
        assert isinstance(result.error, InvalidParameterError)
        assert result.error.field_name == "value"
        assert '"n/a"' in str(result.error)

    def test_missing_threshold(self):
        result = build_kpi_test("Nbr of records", 42, "greater-than", None, "nbr")

        assert not result.ok
        assert result.error.field_name == "threshold"
