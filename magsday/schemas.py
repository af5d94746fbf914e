from __future__ import annotations

from datetime import date as dt_date, time as dt_time
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from magsday.constants import CURRENCY_SYMBOLS, THEMES


def _clean_text(value) -> str:
    return " ".join(str(value or "").split()).strip()


class ScheduleCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    date: dt_date
    time: Optional[dt_time] = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value):
        return _clean_text(value)

    def to_document(self) -> dict:
        return {
            "title": self.title,
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M") if self.time else None,
        }


class PaymentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    amount: float = Field(..., ge=0)
    due_date: Optional[dt_date] = None
    is_paid: bool = False

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value):
        return _clean_text(value)

    def to_document(self) -> dict:
        return {
            "title": self.title,
            "amount": float(self.amount),
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "isPaid": bool(self.is_paid),
        }


class AccomplishmentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=500)
    date: dt_date

    @field_validator("text", mode="before")
    @classmethod
    def _strip_text(cls, value):
        return _clean_text(value)

    def to_document(self) -> dict:
        return {"text": self.text, "date": self.date.isoformat()}


class UserSettingsPatch(BaseModel):
    theme: Optional[str] = None
    currency: Optional[str] = None
    note_pin: Optional[str] = None
    clear_pin: bool = False

    @field_validator("theme")
    @classmethod
    def _known_theme(cls, value):
        if value is not None and value not in THEMES:
            raise ValueError(f"Unknown theme {value!r}")
        return value

    @field_validator("currency")
    @classmethod
    def _known_currency(cls, value):
        if value is not None and value not in CURRENCY_SYMBOLS:
            raise ValueError(f"Unknown currency {value!r}")
        return value

    @field_validator("note_pin", mode="before")
    @classmethod
    def _pin_text(cls, value):
        if value is None:
            return None
        clean = str(value).strip()
        if not clean:
            return None
        if not clean.isdigit() or not 4 <= len(clean) <= 8:
            raise ValueError("PIN must be 4 to 8 digits")
        return clean

    def to_document(self) -> dict:
        payload = {}
        if self.theme is not None:
            payload["theme"] = self.theme
        if self.currency is not None:
            payload["currency"] = self.currency
        if self.clear_pin:
            payload["notePin"] = None
        elif self.note_pin is not None:
            payload["notePin"] = self.note_pin
        return payload
