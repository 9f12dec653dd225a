"""Mini README: Typed views over the documents held by the store.

Structure:
    * UserProfile - application profile attached to an identity.
    * DailyEntry - one user's figures for one calendar day.
    * MonthlyAdvance - cached monthly advance total for one user.
    * utcnow - timestamp helper shared by writers.

Stores hand back plain dictionaries; services convert them with
``from_document`` so business code works with attributes, and export them
with ``as_dict`` for JSON responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def amount_or_zero(value: Optional[float]) -> float:
    """Treat absent amounts as zero for arithmetic."""

    return float(value) if value else 0.0


@dataclass(slots=True)
class UserProfile:
    """Username, role, and deduction settings for one identity."""

    profile_id: str
    user_id: str
    username: str
    is_admin: bool
    deductions: float = 0.0
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserProfile":
        return cls(
            profile_id=document["_id"],
            user_id=document["user_id"],
            username=document["username"],
            is_admin=bool(document.get("is_admin", False)),
            deductions=amount_or_zero(document.get("deductions")),
            created_at=document.get("created_at"),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "profile_id": self.profile_id,
            "user_id": self.user_id,
            "username": self.username,
            "is_admin": self.is_admin,
            "deductions": self.deductions,
            "created_at": _iso(self.created_at),
        }


@dataclass(slots=True)
class DailyEntry:
    """A single day's cash, network, purchase, and advance figures."""

    entry_id: str
    user_id: str
    date: str
    cash_amount: Optional[float] = None
    network_amount: Optional[float] = None
    purchases_amount: Optional[float] = None
    advance_amount: Optional[float] = None
    notes: Optional[str] = None
    total: float = 0.0
    remaining: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "DailyEntry":
        return cls(
            entry_id=document["_id"],
            user_id=document["user_id"],
            date=document["date"],
            cash_amount=document.get("cash_amount"),
            network_amount=document.get("network_amount"),
            purchases_amount=document.get("purchases_amount"),
            advance_amount=document.get("advance_amount"),
            notes=document.get("notes"),
            total=amount_or_zero(document.get("total")),
            remaining=float(document.get("remaining") or 0.0),
            created_at=document.get("created_at"),
            updated_at=document.get("updated_at"),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "entry_id": self.entry_id,
            "user_id": self.user_id,
            "date": self.date,
            "cash_amount": self.cash_amount,
            "network_amount": self.network_amount,
            "purchases_amount": self.purchases_amount,
            "advance_amount": self.advance_amount,
            "notes": self.notes,
            "total": self.total,
            "remaining": self.remaining,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass(slots=True)
class MonthlyAdvance:
    """Materialised sum of one user's advances within a month."""

    advance_id: str
    user_id: str
    year_month: str
    total_advances: float
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "MonthlyAdvance":
        return cls(
            advance_id=document["_id"],
            user_id=document["user_id"],
            year_month=document["year_month"],
            total_advances=amount_or_zero(document.get("total_advances")),
            updated_at=document.get("updated_at"),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "advance_id": self.advance_id,
            "user_id": self.user_id,
            "year_month": self.year_month,
            "total_advances": self.total_advances,
            "updated_at": _iso(self.updated_at),
        }
