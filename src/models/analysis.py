"""Pydantic models for the aggregate analysis written to ``analysis_results.json``."""

import json
from typing import Dict, List, Set

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class TicketStats(BaseModel):
    """Ticket counters accumulated in one pass."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(0, ge=0)
    with_attachments: int = Field(0, ge=0, alias="withAttachments")
    with_ccs: int = Field(0, ge=0, alias="withCCs")
    by_brand: Dict[str, int] = Field(default_factory=dict, alias="byBrand")
    custom_fields: Set[str] = Field(default_factory=set, alias="customFields")

    @model_validator(mode="after")
    def _check_totals(self) -> "TicketStats":
        if self.with_attachments > self.total:
            raise ValueError("withAttachments cannot exceed total")
        if self.with_ccs > self.total:
            raise ValueError("withCCs cannot exceed total")
        if sum(self.by_brand.values()) != self.total:
            raise ValueError("byBrand counts must sum to total")
        return self

    @field_serializer("custom_fields")
    def _serialize_custom_fields(self, value: Set[str]) -> List[str]:
        return sorted(value)


class UserStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(0, ge=0)
    by_organization: Dict[str, int] = Field(default_factory=dict, alias="byOrganization")

    @model_validator(mode="after")
    def _check_totals(self) -> "UserStats":
        if sum(self.by_organization.values()) != self.total:
            raise ValueError("byOrganization counts must sum to total")
        return self


class OrganizationStats(BaseModel):
    total: int = Field(0, ge=0)


class AnalysisResult(BaseModel):
    """
    Aggregate summary of one export, used to plan the migration.

    Serialized with camelCase keys; ``customFields`` becomes a sorted array.
    """

    model_config = ConfigDict(populate_by_name=True)

    tickets: TicketStats = Field(default_factory=TicketStats)
    users: UserStats = Field(default_factory=UserStats)
    organizations: OrganizationStats = Field(default_factory=OrganizationStats)
    estimated_time_minutes: int = Field(0, ge=0, alias="estimatedTimeMinutes")

    def to_json(self) -> str:
        """Render as 2-space indented JSON using the persisted key names."""
        return json.dumps(self.model_dump(mode="json", by_alias=True), indent=2)
