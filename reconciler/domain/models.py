"""Core domain models for search listings and reference companies.

This module defines the data structures shared by every stage of a run:
- RawJobListing: one job as returned by the search provider
- EmployerCandidate: one distinct employer per run, built by deduplication
- ReferenceCompany: canonical company record owned by the reference store
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_optional(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    stripped = v.strip()
    return stripped if stripped else None


class RawJobListing(BaseModel):
    """A job listing as returned by the search provider.

    Every field is optional because the provider does not guarantee any of
    them. Listings are frozen once built.
    """

    employer_name: Optional[str] = Field(None, description="Employer name as published")
    job_title: Optional[str] = Field(None, description="Job title")
    city: Optional[str] = Field(None, description="City of the job")
    apply_url: Optional[str] = Field(None, description="Application link")

    @field_validator("employer_name")
    @classmethod
    def blank_employer_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Keep the name as published; a blank name becomes None."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator("job_title", "city", "apply_url")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace; blank values become None."""
        return _strip_optional(v)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {
            "employer_name": "Acme Manufacturing, Inc.",
            "job_title": "Mechanical Design Engineer",
            "city": "Denver",
            "apply_url": "https://jobs.example.com/acme/123",
        }},
    )


class EmployerCandidate(BaseModel):
    """One distinct employer seen during a run.

    Holds the title, location and URL of the first listing seen for the
    employer; later listings for the same employer are discarded.
    """

    name: str = Field(..., min_length=1, description="Employer name as first seen")
    title: Optional[str] = Field(None, description="Title of the first listing")
    location: Optional[str] = Field(None, description="City of the first listing")
    url: Optional[str] = Field(None, description="Apply link of the first listing")

    @property
    def key(self) -> str:
        """Case-folded name used as the deduplication key."""
        return self.name.lower()

    @classmethod
    def from_listing(cls, listing: RawJobListing) -> "EmployerCandidate":
        """Build a candidate from the first listing of an employer."""
        return cls(
            name=listing.employer_name,
            title=listing.job_title,
            location=listing.city,
            url=listing.apply_url,
        )


class ReferenceCompany(BaseModel):
    """Canonical company record from the reference store.

    Field aliases follow the store's column names (``companyname``,
    ``activerole``) so rows can be validated directly. The tier is passed
    through to reports unchanged.
    """

    id: Union[int, str] = Field(..., description="Store identifier")
    company_name: str = Field(..., alias="companyname", description="Canonical company name")
    tier: Optional[Union[int, str]] = Field(None, description="Categorical tier")
    active_role: bool = Field(False, alias="activerole", description="Has a matched open posting")

    @field_validator("active_role", mode="before")
    @classmethod
    def null_is_false(cls, v):
        """The store leaves ``activerole`` null for companies never matched."""
        return False if v is None else v

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={"example": {
            "id": 42,
            "companyname": "Acme Manufacturing",
            "tier": "1",
            "activerole": False,
        }},
    )
