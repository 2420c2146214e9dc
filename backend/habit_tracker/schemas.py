from datetime import datetime
from typing import List

from pydantic import AliasChoices, BaseModel, Field, conint, constr, field_serializer

from .dates import as_utc


WeekDay = conint(ge=0, le=6)


class HabitBase(BaseModel):
    title: constr(min_length=1)


class HabitCreate(HabitBase):
    week_days: List[WeekDay] = Field(
        default_factory=list,
        validation_alias=AliasChoices("weekDays", "week_days"),
    )


class HabitResponse(HabitBase):
    id: str
    created_at: datetime
    week_days: List[int] = Field(
        validation_alias=AliasChoices("weekDays", "week_days"),
        serialization_alias="weekDays",
    )

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime):
        return as_utc(value)

    class Config:
        from_attributes = True


class DayResponse(BaseModel):
    possible_habits: List[HabitResponse] = Field(serialization_alias="possibleHabits")
    completed_habits: List[str] = Field(serialization_alias="completedHabits")


class ToggleResponse(BaseModel):
    status: str = "success"
    completed: bool


class SummaryEntry(BaseModel):
    day_id: str = Field(serialization_alias="dayId")
    date: datetime
    completed: int
    amount: int

    @field_serializer("date")
    def serialize_date(self, value: datetime):
        return as_utc(value)
