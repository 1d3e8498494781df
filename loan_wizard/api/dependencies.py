"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from loan_wizard.infrastructure.clients.loan_service import LoanServiceClient
from loan_wizard.infrastructure.database.repositories import DurableSlot
from loan_wizard.infrastructure.database.session import make_engine, make_session_factory
from loan_wizard.navigation.navigator import Navigator
from loan_wizard.state.store import FormStateStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def build_store() -> FormStateStore:
    """Wire a store to the configured slot database and record store"""
    slot = DurableSlot(make_session_factory(make_engine()))
    return FormStateStore(slot=slot, client=LoanServiceClient(), navigator=Navigator())


def get_store(request: Request) -> FormStateStore:
    """Provide the app-wide form state store, creating it on first use"""
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = build_store()
        request.app.state.store = store
    return store
