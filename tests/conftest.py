"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict
from unittest.mock import AsyncMock
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from loan_wizard.api.dependencies import get_store
from loan_wizard.api.main import create_app
from loan_wizard.infrastructure.clients.loan_service import LoanServiceClient
from loan_wizard.infrastructure.database.repositories import DurableSlot
from loan_wizard.infrastructure.database.session import make_engine, make_session_factory
from loan_wizard.navigation.navigator import Navigator
from loan_wizard.state.store import FormStateStore


@pytest.fixture
def session_factory(tmp_path) -> sessionmaker:
    """Fresh SQLite database per test"""
    engine = make_engine(f"sqlite:///{tmp_path / 'slot.db'}")
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def slot(session_factory: sessionmaker) -> DurableSlot:
    return DurableSlot(session_factory, key="loan-application-data")


@pytest.fixture
def loan_client() -> AsyncMock:
    """Record store double; create returns a record with id app-123"""
    client = AsyncMock(spec=LoanServiceClient)
    client.create.side_effect = lambda data: {**data, "id": "app-123"}
    client.update.side_effect = lambda application_id, data: {**data, "id": application_id}
    return client


@pytest.fixture
def navigator() -> Navigator:
    return Navigator()


@pytest.fixture
def store(slot: DurableSlot, loan_client: AsyncMock, navigator: Navigator) -> FormStateStore:
    return FormStateStore(slot=slot, client=loan_client, navigator=navigator)


@pytest.fixture
def app(store: FormStateStore) -> FastAPI:
    """FastAPI app wired to the test store"""
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def personal_information() -> Dict[str, Any]:
    return {"firstName": "Anna", "lastName": "Müller", "dateOfBirth": "1990-05-15"}


@pytest.fixture
def contact_details() -> Dict[str, Any]:
    return {"email": "anna.mueller@example.com", "phone": "+491701234567"}


@pytest.fixture
def loan_request() -> Dict[str, Any]:
    return {"loanAmount": 20000, "upfrontPayment": 2000, "terms": 20}


@pytest.fixture
def financial_information() -> Dict[str, Any]:
    """Net income 4000 covers both the 2000 combined minimum and the 1000 installment at 50%"""
    return {
        "monthlySalary": 4000,
        "hasAdditionalIncome": False,
        "hasMortgage": False,
        "hasOtherCredits": False,
    }


@pytest.fixture
def application_sections(
    personal_information: Dict[str, Any],
    contact_details: Dict[str, Any],
    loan_request: Dict[str, Any],
    financial_information: Dict[str, Any],
) -> Dict[str, Dict[str, Any]]:
    """Complete application keyed by section"""
    return {
        "personalInformation": personal_information,
        "contactDetails": contact_details,
        "loanRequest": loan_request,
        "financialInformation": financial_information,
        "finalization": {"confirmed": True},
    }


@pytest.fixture
def complete_record(application_sections: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Same application as a flat record, as held by the store"""
    record: Dict[str, Any] = {}
    for section in application_sections.values():
        record.update(section)
    return record
