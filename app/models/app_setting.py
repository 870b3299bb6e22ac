"""
Orca Payroll - Application Settings Model

Process-wide key/value settings. Values are JSON-encoded text; there is no
versioning or effective date, so a change applies to every later read.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class AppSettingKey:
    """Known setting keys."""
    REPORTING_CURRENCY_ID = "reporting_currency_id"
    EXCHANGE_RATES = "exchange_rates"


class AppSetting(BaseModel):
    """A single JSON-encoded application setting."""

    __tablename__ = "app_settings"

    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
