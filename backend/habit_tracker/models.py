import uuid

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from .database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class Habit(Base):
    __tablename__ = "habits"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    weekdays = relationship(
        "HabitWeekDay",
        back_populates="habit",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def week_days(self):
        return sorted(weekday.week_day for weekday in self.weekdays)


class HabitWeekDay(Base):
    __tablename__ = "habit_week_days"
    __table_args__ = (
        UniqueConstraint("habit_id", "week_day", name="uq_habit_week_day"),
        CheckConstraint("week_day BETWEEN 0 AND 6", name="ck_habit_week_day_range"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    habit_id = Column(String(36), ForeignKey("habits.id"), nullable=False)
    week_day = Column(Integer, nullable=False, index=True)

    habit = relationship("Habit", back_populates="weekdays")


class Day(Base):
    __tablename__ = "days"

    id = Column(String(36), primary_key=True, default=new_id)
    date = Column(DateTime, nullable=False, unique=True)
    # weekday_of(date), stored so SQL never derives weekdays on its own
    week_day = Column(Integer, nullable=False)

    day_habits = relationship("DayHabit", back_populates="day")


class DayHabit(Base):
    __tablename__ = "day_habits"
    __table_args__ = (
        UniqueConstraint("day_id", "habit_id", name="uq_day_habit"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    day_id = Column(String(36), ForeignKey("days.id"), nullable=False)
    habit_id = Column(String(36), ForeignKey("habits.id"), nullable=False)

    day = relationship("Day", back_populates="day_habits")
