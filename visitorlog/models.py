from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rules import VACANT_STATUSES


class GenderBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    male: float = 0.0
    female: float = 0.0
    children: float = 0.0

    @property
    def total(self) -> float:
        return self.male + self.female + self.children


class VisitorRecord(BaseModel):
    """One normalized sheet row. Built fresh on every load, never mutated."""

    model_config = ConfigDict(frozen=True)

    entry_number: str = ""
    manual_entry_number: str = ""
    timestamp: Optional[datetime] = None
    arrival_time: str = ""
    arrival_date: Optional[datetime] = None
    name: str = ""
    address: str = ""
    pin_code: str = ""
    state: str = ""
    mobile: str = ""
    whatsapp: str = ""
    from_where: str = ""
    purpose: str = ""
    destination: str = ""
    exit_date: Optional[datetime] = None
    photo: str = ""
    e_card: str = ""
    income_card: str = ""
    other_income_card: str = ""
    room_number: str = ""
    email: str = ""
    male: float = Field(default=0.0, ge=0)
    female: float = Field(default=0.0, ge=0)
    children: float = Field(default=0.0, ge=0)
    total_travellers: float = Field(default=0.0, ge=0)
    staying_travellers: float = Field(default=0.0, ge=0)
    total_visitors: float = Field(default=0.0, ge=0)
    gender_summary: str = ""
    gender_breakdown: Optional[GenderBreakdown] = None
    occupancy_status: str = ""

    def effective_male(self) -> float:
        if self.male > 0:
            return self.male
        return self.gender_breakdown.male if self.gender_breakdown else 0.0

    def effective_female(self) -> float:
        if self.female > 0:
            return self.female
        return self.gender_breakdown.female if self.gender_breakdown else 0.0

    def effective_children(self) -> float:
        if self.children > 0:
            return self.children
        return self.gender_breakdown.children if self.gender_breakdown else 0.0

    def effective_breakdown(self) -> GenderBreakdown:
        return GenderBreakdown(
            male=self.effective_male(),
            female=self.effective_female(),
            children=self.effective_children(),
        )

    def is_vacancy_marker(self) -> bool:
        return self.occupancy_status.strip().casefold() in VACANT_STATUSES


class FilterCriteria(BaseModel):
    day: Optional[date] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    search: str = ""

    @field_validator("day", "date_from", "date_to", mode="before")
    @classmethod
    def _start_of_day(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value


class Totals(BaseModel):
    model_config = ConfigDict(frozen=True)

    visitors: float = 0.0
    male: float = 0.0
    female: float = 0.0
    children: float = 0.0
    entries: int = 0


class OccupancySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: Optional[date] = None
    total_people: float = 0.0
    breakdown: GenderBreakdown = Field(default_factory=GenderBreakdown)
    occupied_rooms: List[str] = Field(default_factory=list)
    vacant_rooms: List[str] = Field(default_factory=list)
    rooms_filled: int = 0
    rooms_vacant: int = 0


class DailyBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date
    label: str
    male: float = 0.0
    female: float = 0.0
    children: float = 0.0


class RankedCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    count: float


class Breakdowns(BaseModel):
    gender: GenderBreakdown
    daily: List[DailyBreakdown] = Field(default_factory=list)
    states: List[RankedCount] = Field(default_factory=list)
    origins: List[RankedCount] = Field(default_factory=list)


class RecordsResponse(BaseModel):
    count: int
    columns: List[str] = Field(default_factory=list)
    records: List[VisitorRecord] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    criteria: FilterCriteria
    records: List[VisitorRecord] = Field(default_factory=list)
    totals: Totals
    breakdowns: Breakdowns
    occupancy: OccupancySummary


class EntryPayload(BaseModel):
    values: dict = Field(default_factory=dict)
    sheet_values: list = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool = True
