import json

import pytest
from pydantic import ValidationError

from src.models.analysis import AnalysisResult, OrganizationStats, TicketStats, UserStats
from src.models.records import Ticket


def _sample_result() -> AnalysisResult:
    return AnalysisResult(
        tickets=TicketStats(
            total=3,
            with_attachments=1,
            with_ccs=1,
            by_brand={"5": 2, "undefined": 1},
            custom_fields={"360002", "360001"},
        ),
        users=UserStats(total=2, by_organization={"10": 1, "none": 1}),
        organizations=OrganizationStats(total=1),
        estimated_time_minutes=1,
    )


class TestRecordModels:
    def test_ticket_defaults(self):
        ticket = Ticket()

        assert ticket.brand_id is None
        assert ticket.attachments == []
        assert ticket.cc_users == []
        assert ticket.custom_fields == []


class TestAnalysisResult:
    """Test cases for the persisted analysis model."""

    def test_json_uses_camel_case_keys(self):
        data = json.loads(_sample_result().to_json())

        assert set(data) == {"tickets", "users", "organizations", "estimatedTimeMinutes"}
        assert data["tickets"]["withAttachments"] == 1
        assert data["tickets"]["withCCs"] == 1
        assert data["tickets"]["byBrand"] == {"5": 2, "undefined": 1}
        assert data["users"]["byOrganization"] == {"10": 1, "none": 1}

    def test_custom_fields_render_as_array(self):
        data = json.loads(_sample_result().to_json())

        assert data["tickets"]["customFields"] == ["360001", "360002"]

    def test_two_space_indent(self):
        text = _sample_result().to_json()

        assert text.startswith('{\n  "tickets": {\n    "total": 3')

    def test_round_trip(self):
        result = _sample_result()
        decoded = AnalysisResult.model_validate_json(result.to_json())

        assert decoded == result
        assert decoded.tickets.custom_fields == {"360001", "360002"}

    def test_counts_above_total_rejected(self):
        with pytest.raises(ValidationError):
            TicketStats(total=1, with_attachments=2, by_brand={"undefined": 1})

    def test_brand_sum_must_match_total(self):
        with pytest.raises(ValidationError):
            TicketStats(total=2, by_brand={"5": 1})

    def test_organization_sum_must_match_total(self):
        with pytest.raises(ValidationError):
            UserStats(total=1, by_organization={})
