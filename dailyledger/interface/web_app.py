"""Mini README: FastAPI HTTP surface for the daily ledger service.

Structure:
    * create_application - application factory wiring routes to LedgerService.
    * ledger_error_handler - renders LedgerError failures as JSON.

The caller's identity comes from the header configured in
``LedgerSettings.identity_header`` (populated by the authentication gateway)
and is passed explicitly to every service operation. ``POST /identities``
mints identity records for development setups without a gateway. Mutations
accept form fields; reads use query parameters.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import JSONResponse

from ..auth import HeaderIdentityProvider, IdentityProvider
from ..configuration import LedgerSettings, get_settings
from ..errors import LedgerError
from ..logging_utils import get_logger
from ..service import LedgerService
from ..storage import build_store

LOGGER = get_logger(__name__)


async def ledger_error_handler(request: Request, error: LedgerError) -> JSONResponse:
    """Translate domain failures into their HTTP status and a localized message."""

    LOGGER.info(
        "%s %s failed with %s: %s", request.method, request.url.path, error.code, error
    )
    return JSONResponse(status_code=error.status_code, content=error.as_dict())


def create_application(
    service: Optional[LedgerService] = None,
    settings: Optional[LedgerSettings] = None,
    identity_provider: Optional[IdentityProvider] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    service = service or LedgerService(build_store(settings))
    identity_provider = identity_provider or HeaderIdentityProvider(
        service.identities, header_name=settings.identity_header
    )

    app = FastAPI(title="Daily Ledger Service", version="1.0.0")
    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.state.service = service

    def current_caller(request: Request) -> Optional[str]:
        return identity_provider.resolve(request.headers)

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"ok": True, "storage": service.store.backend_name})

    @app.post("/identities")
    async def register_identity(name: Optional[str] = Form(None)) -> JSONResponse:
        """Create an identity record, standing in for the auth provider."""

        user_id = service.identities.register(name)
        return JSONResponse({"user_id": user_id}, status_code=201)

    # ----------------------------------------------------------------- profile
    @app.post("/profile")
    async def create_profile(
        username: str = Form(...),
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        profile = service.create_user_profile(caller, username)
        return JSONResponse({"profile": profile.as_dict()})

    @app.get("/profile/check")
    async def check_profile(caller: Optional[str] = Depends(current_caller)) -> JSONResponse:
        profile = service.check_user_profile(caller)
        return JSONResponse({"profile": profile.as_dict() if profile else None})

    @app.get("/profile")
    async def get_profile(
        target_user_id: Optional[str] = None,
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        profile = service.get_user_profile(caller, target_user_id)
        return JSONResponse({"profile": profile.as_dict() if profile else None})

    # ----------------------------------------------------------------- entries
    @app.get("/entries")
    async def list_entries(
        target_user_id: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        entries = service.list_entries(caller, target_user_id, year, month)
        return JSONResponse({"entries": [entry.as_dict() for entry in entries]})

    @app.post("/entries")
    async def upsert_entry(
        date: str = Form(...),
        cash_amount: Optional[float] = Form(None),
        network_amount: Optional[float] = Form(None),
        purchases_amount: Optional[float] = Form(None),
        advance_amount: Optional[float] = Form(None),
        notes: Optional[str] = Form(None),
        target_user_id: Optional[str] = Form(None),
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        result = service.upsert_entry(
            caller,
            date,
            cash_amount=cash_amount,
            network_amount=network_amount,
            purchases_amount=purchases_amount,
            advance_amount=advance_amount,
            notes=notes,
            target_user_id=target_user_id,
        )
        return JSONResponse(result)

    @app.get("/advances")
    async def monthly_advance_total(
        year_month: str,
        target_user_id: Optional[str] = None,
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        total = service.get_monthly_advance_total(caller, year_month, target_user_id)
        return JSONResponse({"year_month": year_month, "total_advances": total})

    # ------------------------------------------------------------------- admin
    @app.get("/admin/users")
    async def list_users(caller: Optional[str] = Depends(current_caller)) -> JSONResponse:
        return JSONResponse({"users": service.list_all_users(caller)})

    @app.post("/admin/users/{user_id}/deductions")
    async def set_deductions(
        user_id: str,
        deductions: float = Form(...),
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        return JSONResponse(service.set_deductions(caller, user_id, deductions))

    @app.post("/admin/users/{user_id}/username")
    async def rename_user(
        user_id: str,
        new_username: str = Form(...),
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        return JSONResponse(service.rename_user(caller, user_id, new_username))

    @app.delete("/admin/users/{user_id}")
    async def delete_user(
        user_id: str, caller: Optional[str] = Depends(current_caller)
    ) -> JSONResponse:
        return JSONResponse(service.delete_user(caller, user_id))

    @app.delete("/admin/entries/{entry_id}")
    async def delete_entry(
        entry_id: str, caller: Optional[str] = Depends(current_caller)
    ) -> JSONResponse:
        return JSONResponse(service.delete_entry(caller, entry_id))

    @app.get("/admin/reports/aggregate")
    async def users_monthly_aggregate(
        year: int, month: int, caller: Optional[str] = Depends(current_caller)
    ) -> JSONResponse:
        report = service.get_users_monthly_aggregate(caller, year, month)
        return JSONResponse(report.as_dict())

    @app.get("/admin/reports/comprehensive")
    async def comprehensive_monthly_summary(
        year: int, month: int, caller: Optional[str] = Depends(current_caller)
    ) -> JSONResponse:
        report = service.get_comprehensive_monthly_summary(caller, year, month)
        LOGGER.debug("Returning %s day buckets", len(report.daily_summary))
        return JSONResponse(report.as_dict())

    @app.get("/admin/reports/users")
    async def users_monthly_summary(
        year: int, month: int, caller: Optional[str] = Depends(current_caller)
    ) -> JSONResponse:
        summaries = service.get_users_monthly_summary(caller, year, month)
        return JSONResponse({"users": [summary.as_dict() for summary in summaries]})

    @app.post("/admin/reset/complete")
    async def complete_reset(
        confirmation_text: str = Form(...),
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        return JSONResponse(service.complete_system_reset(caller, confirmation_text))

    @app.post("/admin/reset/data")
    async def reset_data(
        confirmation_text: str = Form(...),
        caller: Optional[str] = Depends(current_caller),
    ) -> JSONResponse:
        return JSONResponse(service.reset_data_only(caller, confirmation_text))

    return app
