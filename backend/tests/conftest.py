from __future__ import annotations

from datetime import date

import pytest
from flask.testing import FlaskClient

from backend.app import create_app
from backend.config import Settings
from backend.models import ContractTerms


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(Settings(app_name="Test Schedule"))
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def terms() -> ContractTerms:
    return ContractTerms(
        siteName="Tehran Central",
        baseAmount=100_000_000,
        startDate=date(2024, 1, 1),
        duration=3,
    )
