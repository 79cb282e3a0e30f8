"""Shared fixtures: an in-memory screening catalog and an isolated SQLite database."""

import os
import tempfile

# Must be set before screening_api.core.config is imported
_DB_DIR = tempfile.mkdtemp(prefix="screening-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("APP_ENV", "test")

import pytest

from screening_api.services.catalog import ServiceCatalog


def service(id, name, price, category, dependencies=(), conflicts=()):
    return {
        "id": id,
        "name": name,
        "base_price": price,
        "category": category,
        "dependencies": list(dependencies),
        "conflicts": list(conflicts),
    }


SCREENING_RECORDS = [
    service("state_criminal", "State Criminal Search", 15, "criminal"),
    service("county_criminal", "County Criminal Search", 25, "criminal", ["state_criminal"]),
    service("federal_criminal", "Federal Criminal Search", 35, "criminal", ["state_criminal"]),
    service("national_criminal", "National Criminal Database", 55, "criminal", ["state_criminal"]),
    service("employment_verification", "Employment Verification", 35, "verification"),
    service("education_verification", "Education Verification", 20, "verification"),
    service("professional_license", "Professional License Verification", 25, "verification"),
    service("mvr", "Motor Vehicle Report (MVR)", 20, "driving"),
    service("drug_5_panel", "Drug Test (5-Panel)", 45, "drug_screening", conflicts=["drug_10_panel"]),
    service("drug_10_panel", "Drug Test (10-Panel)", 65, "drug_screening", conflicts=["drug_5_panel"]),
]

ALL_CRIMINAL = ["state_criminal", "county_criminal", "federal_criminal", "national_criminal"]
ALL_VERIFICATION = ["employment_verification", "education_verification", "professional_license"]


@pytest.fixture
def catalog():
    """The standard screening catalog."""
    return ServiceCatalog.load([dict(r) for r in SCREENING_RECORDS])
