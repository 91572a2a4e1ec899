# tests for report models: submission validation and immutability

import pytest
from pydantic import ValidationError

from healthwatch.models.report import ReportCreate, ReportOptions, AGE_GROUPS
from tests.conftest import VALID_PAYLOAD, make_report


class TestReportCreate:
    """submission payload"""

    def test_valid_payload_has_no_missing_fields(self):
        assert ReportCreate(**VALID_PAYLOAD).missing_fields() == []

    def test_missing_fields_lists_blank_values(self):
        payload = ReportCreate(region="  ", ageGroup="", symptomCategory="Other")
        assert payload.missing_fields() == ["region", "ageGroup", "environmentIssue"]

    def test_populate_by_field_name(self):
        payload = ReportCreate(region="M5V", age_group="65+")
        assert payload.age_group == "65+"

    @pytest.mark.parametrize("field,value", [
        ("ageGroup", "12-17"),
        ("symptomCategory", "fever"),
        ("environmentIssue", "Earthquake"),
    ])
    def test_unknown_choices_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ReportCreate(**{**VALID_PAYLOAD, field: value})


class TestReport:
    """stored record"""

    def test_frozen(self):
        report = make_report()
        with pytest.raises(ValidationError):
            report.region = "elsewhere"

    def test_aliases(self):
        data = make_report().model_dump(by_alias=True)
        assert "ageGroup" in data
        assert "createdAt" in data


class TestReportOptions:

    def test_copies_are_independent(self):
        options = ReportOptions()
        options.age_groups.append("100+")
        assert "100+" not in AGE_GROUPS
