"""Domain models for the reconciler."""

from .models import EmployerCandidate, RawJobListing, ReferenceCompany

__all__ = ["RawJobListing", "EmployerCandidate", "ReferenceCompany"]
