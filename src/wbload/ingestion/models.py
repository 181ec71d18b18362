"""
Typed views of World Bank API v2 payloads.

Every JSON response is a two-element array: a pagination object followed by
the list of records. The models below describe both slots.
"""

from pydantic import BaseModel, ConfigDict, Field


class PageInfo(BaseModel):
    """Pagination metadata (first slot of every response)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    page: int
    pages: int
    per_page: int
    total: int
    source_id: str | None = Field(default=None, alias="sourceid")
    last_updated: str | None = Field(default=None, alias="lastupdated")


class CodeLabel(BaseModel):
    """An {id, value} pair as used by the API for indicators, countries and sources."""

    model_config = ConfigDict(frozen=True)

    id: str
    value: str


class Topic(BaseModel):
    """A topic tag. The API sometimes sends empty objects here."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    value: str | None = None


class IndicatorRecord(BaseModel):
    """One observation of an indicator for a country and period."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    indicator: CodeLabel
    country: CodeLabel
    iso3: str = Field(alias="countryiso3code")
    period: str = Field(alias="date")
    value: float | None = None
    decimal: int | None = None


class SourceInfo(BaseModel):
    """A data source (catalog) published by the API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    code: str | None = None
    description: str | None = None
    url: str | None = None
    last_updated: str | None = Field(default=None, alias="lastupdated")
    data_availability: str | None = Field(default=None, alias="dataavailability")
    metadata_availability: str | None = Field(default=None, alias="metadataavailability")
    concepts: str | None = None


class IndicatorInfo(BaseModel):
    """Indicator metadata listed for a source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    unit: str | None = None
    source: CodeLabel | None = None
    source_note: str | None = Field(default=None, alias="sourceNote")
    source_organization: str | None = Field(default=None, alias="sourceOrganization")
    topics: list[Topic] = Field(default_factory=list)
