from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.errors import error_response
from app.api.schemas import (
    BookingListResponseSchema,
    BookingSchema,
    BookingStatsSchema,
    LoginRequestSchema,
    LoginResponseSchema,
    VacationCreateSchema,
    VacationSchema,
    WorkingHoursSchema,
)
from app.application.exceptions import AuthenticationError, ConfigurationError, VacationNotFoundError
from app.application.use_cases.admin_auth import AdminAuthUseCase
from app.application.use_cases.booking import BookingUseCase
from app.application.use_cases.vacation import VacationUseCase
from app.application.use_cases.working_hours import WorkingHoursUseCase
from app.domain.entities.booking import BookingStatus
from app.wiring.dependencies import (
    get_admin_auth_use_case,
    get_booking_use_case,
    get_vacation_use_case,
    get_working_hours_use_case,
)


router = APIRouter(prefix="/admin")
logger = logging.getLogger(__name__)
bearer = HTTPBearer(auto_error=False)


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    auth: AdminAuthUseCase = Depends(get_admin_auth_use_case),
) -> str:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    try:
        return auth.verify(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except ConfigurationError as e:
        logger.error("Admin auth not configured", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Admin authentication is not configured")


@router.post("/login", response_model=LoginResponseSchema)
def login(req: LoginRequestSchema, auth: AdminAuthUseCase = Depends(get_admin_auth_use_case)):
    try:
        token = auth.login(req.username, req.password)
    except AuthenticationError as e:
        return error_response(401, str(e))
    except ConfigurationError as e:
        logger.error("Admin auth not configured", extra={"error": str(e)})
        return error_response(500, "Admin authentication is not configured")
    return LoginResponseSchema(token=token)


@router.get("/bookings", response_model=BookingListResponseSchema)
def list_bookings(
    status: str | None = Query(None),
    search: str | None = Query(None),
    _admin: str = Depends(require_admin),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    status_filter: BookingStatus | None = None
    if status and status != "all":
        try:
            status_filter = BookingStatus(status)
        except ValueError:
            return error_response(400, f"Unknown status: {status}")

    bookings, stats = uc.list_bookings(status=status_filter, search=search)
    return BookingListResponseSchema(
        bookings=[BookingSchema.from_entity(b) for b in bookings],
        stats=BookingStatsSchema(**stats),
    )


@router.get("/vacation", response_model=list[VacationSchema])
def list_vacations(
    _admin: str = Depends(require_admin),
    uc: VacationUseCase = Depends(get_vacation_use_case),
):
    return [VacationSchema.from_entity(block) for block in uc.list_blocks()]


@router.post("/vacation", response_model=VacationSchema)
def create_vacation(
    req: VacationCreateSchema,
    _admin: str = Depends(require_admin),
    uc: VacationUseCase = Depends(get_vacation_use_case),
):
    try:
        block = uc.block(req.startDate, req.endDate, req.reason)
    except ValueError as e:
        return error_response(400, str(e))
    except Exception as e:
        logger.exception("Error creating vacation", extra={"error": str(e)})
        return error_response(500, "Failed to create vacation", str(e))
    return VacationSchema.from_entity(block)


@router.delete("/vacation/{vacation_id}")
def delete_vacation(
    vacation_id: str,
    _admin: str = Depends(require_admin),
    uc: VacationUseCase = Depends(get_vacation_use_case),
):
    try:
        uc.unblock(vacation_id)
    except VacationNotFoundError:
        return error_response(404, "Vacation not found")
    except Exception as e:
        logger.exception("Error deleting vacation", extra={"vacation_id": vacation_id, "error": str(e)})
        return error_response(500, "Failed to delete vacation", str(e))
    return {"success": True}


@router.get("/settings/working-hours", response_model=WorkingHoursSchema)
def get_working_hours(
    _admin: str = Depends(require_admin),
    uc: WorkingHoursUseCase = Depends(get_working_hours_use_case),
):
    hours = uc.get()
    return WorkingHoursSchema(start=hours.start, end=hours.end)


@router.post("/settings/working-hours")
def update_working_hours(
    req: WorkingHoursSchema,
    _admin: str = Depends(require_admin),
    uc: WorkingHoursUseCase = Depends(get_working_hours_use_case),
):
    try:
        uc.update(req.start, req.end)
    except ValueError as e:
        return error_response(400, str(e))
    return {"success": True}
