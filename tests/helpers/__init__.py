"""Test helper utilities for Company Opening Reconciler tests."""

from .fakes import FakeSearchProvider, InMemoryReferenceStore, company, listing, load_scenario

__all__ = [
    "FakeSearchProvider",
    "InMemoryReferenceStore",
    "company",
    "listing",
    "load_scenario",
]
