"""
Orca Payroll - Settings Router

Admin settings: currencies, departments, the reporting currency and the
exchange rates into it. Everyone can read; only admins can change.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import require_permission
from app.models.user import User
from app.schemas.currency import (
    CurrencyCreateRequest,
    CurrencyUpdateRequest,
    CurrencyResponse,
    CurrencyListResponse,
    DepartmentCreateRequest,
    DepartmentResponse,
    DepartmentListResponse,
)
from app.schemas.settings import (
    ReportingCurrencyRequest,
    ReportingCurrencyResponse,
    ExchangeRatesRequest,
    ExchangeRatesResponse,
)
from app.services.currency_service import CurrencyService
from app.services.department_service import DepartmentService
from app.services.settings_service import SettingsService
from app.utils.permissions import Permission


router = APIRouter()

can_view = require_permission([Permission.VIEW_DASHBOARD])
can_manage_reference = require_permission([Permission.MANAGE_REFERENCE_DATA])
can_manage_settings = require_permission([Permission.MANAGE_SETTINGS])


# ===========================================
# CURRENCIES
# ===========================================

@router.get("/currencies", response_model=CurrencyListResponse, summary="List currencies")
async def list_currencies(
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    currencies = await CurrencyService(db).get_currencies()
    return CurrencyListResponse(
        currencies=[CurrencyResponse.model_validate(c) for c in currencies],
        total=len(currencies),
    )


@router.get("/currencies/{currency_id}", response_model=CurrencyResponse, summary="Get currency")
async def get_currency(
    currency_id: UUID,
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    return await CurrencyService(db).get_currency_or_404(currency_id)


@router.post(
    "/currencies",
    response_model=CurrencyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create currency",
)
async def create_currency(
    request: CurrencyCreateRequest,
    current_user: User = Depends(can_manage_reference),
    db: AsyncSession = Depends(get_async_session),
):
    return await CurrencyService(db).create_currency(code=request.code, name=request.name)


@router.patch("/currencies/{currency_id}", response_model=CurrencyResponse, summary="Update currency")
async def update_currency(
    currency_id: UUID,
    request: CurrencyUpdateRequest,
    current_user: User = Depends(can_manage_reference),
    db: AsyncSession = Depends(get_async_session),
):
    service = CurrencyService(db)
    currency = await service.get_currency_or_404(currency_id)
    return await service.update_currency(currency, code=request.code, name=request.name)


@router.delete(
    "/currencies/{currency_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete currency",
)
async def delete_currency(
    currency_id: UUID,
    current_user: User = Depends(can_manage_reference),
    db: AsyncSession = Depends(get_async_session),
):
    service = CurrencyService(db)
    currency = await service.get_currency_or_404(currency_id)
    await service.delete_currency(currency)


# ===========================================
# DEPARTMENTS
# ===========================================

@router.get("/departments", response_model=DepartmentListResponse, summary="List departments")
async def list_departments(
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    departments = await DepartmentService(db).get_departments()
    return DepartmentListResponse(
        departments=[DepartmentResponse.model_validate(d) for d in departments],
        total=len(departments),
    )


@router.get("/departments/{department_id}", response_model=DepartmentResponse, summary="Get department")
async def get_department(
    department_id: UUID,
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    return await DepartmentService(db).get_department_or_404(department_id)


@router.post(
    "/departments",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create department",
)
async def create_department(
    request: DepartmentCreateRequest,
    current_user: User = Depends(can_manage_reference),
    db: AsyncSession = Depends(get_async_session),
):
    return await DepartmentService(db).create_department(request.name)


@router.patch("/departments/{department_id}", response_model=DepartmentResponse, summary="Rename department")
async def rename_department(
    department_id: UUID,
    request: DepartmentCreateRequest,
    current_user: User = Depends(can_manage_reference),
    db: AsyncSession = Depends(get_async_session),
):
    service = DepartmentService(db)
    department = await service.get_department_or_404(department_id)
    return await service.rename_department(department, request.name)


@router.delete(
    "/departments/{department_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete department",
)
async def delete_department(
    department_id: UUID,
    current_user: User = Depends(can_manage_reference),
    db: AsyncSession = Depends(get_async_session),
):
    service = DepartmentService(db)
    department = await service.get_department_or_404(department_id)
    await service.delete_department(department)


# ===========================================
# REPORTING CURRENCY & EXCHANGE RATES
# ===========================================

@router.get(
    "/reporting-currency",
    response_model=ReportingCurrencyResponse,
    summary="Get reporting currency",
)
async def get_reporting_currency(
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    return ReportingCurrencyResponse(
        reporting_currency_id=await SettingsService(db).get_reporting_currency_id()
    )


@router.put(
    "/reporting-currency",
    response_model=ReportingCurrencyResponse,
    summary="Set reporting currency",
    description="Set the currency dashboard amounts are converted into. null disables conversion.",
)
async def set_reporting_currency(
    request: ReportingCurrencyRequest,
    current_user: User = Depends(can_manage_settings),
    db: AsyncSession = Depends(get_async_session),
):
    currency_id = await SettingsService(db).set_reporting_currency_id(request.reporting_currency_id)
    return ReportingCurrencyResponse(reporting_currency_id=currency_id)


@router.get(
    "/exchange-rates",
    response_model=ExchangeRatesResponse,
    summary="Get exchange rates",
)
async def get_exchange_rates(
    current_user: User = Depends(can_view),
    db: AsyncSession = Depends(get_async_session),
):
    service = SettingsService(db)
    return ExchangeRatesResponse(
        reporting_currency_id=await service.get_reporting_currency_id(),
        rates=await service.get_exchange_rates(),
    )


@router.put(
    "/exchange-rates",
    response_model=ExchangeRatesResponse,
    summary="Replace exchange rates",
    description="1 unit of each currency = rate units of the reporting currency.",
)
async def set_exchange_rates(
    request: ExchangeRatesRequest,
    current_user: User = Depends(can_manage_settings),
    db: AsyncSession = Depends(get_async_session),
):
    service = SettingsService(db)
    rates = await service.set_exchange_rates(request.rates)
    return ExchangeRatesResponse(
        reporting_currency_id=await service.get_reporting_currency_id(),
        rates=rates,
    )
