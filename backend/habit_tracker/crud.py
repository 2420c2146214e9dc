import enum
import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models
from .dates import SATURDAY, SUNDAY, DateLike, day_boundary, today as current_day, weekday_of
from .errors import ConflictError, NotFoundError, ValidationError
from .schemas import HabitCreate

logger = logging.getLogger(__name__)


class ToggleResult(str, enum.Enum):
    COMPLETED_NOW = "completed"
    UNCOMPLETED_NOW = "uncompleted"


def schedulable_on(date_expr, week_day_expr):
    """SQL condition for "a habit is possible on this day".

    Needs ``habits`` joined with ``habit_week_days``. Used both for a single
    date (plain values) and for the summary (correlated ``days`` columns).
    """
    return and_(
        models.Habit.created_at <= date_expr,
        models.HabitWeekDay.week_day == week_day_expr,
    )


def _parse_id(raw) -> Optional[str]:
    # only the canonical hyphenated form; no hex, urn or braces
    if not isinstance(raw, str):
        return None
    try:
        parsed = str(uuid.UUID(raw))
    except ValueError:
        return None
    if parsed != raw.lower():
        return None
    return parsed


def _insert_unique(db: Session, obj):
    try:
        with db.begin_nested():
            db.add(obj)
    except IntegrityError as exc:
        raise ConflictError(f"{type(obj).__name__} already exists") from exc
    return obj


def _habit_order():
    return models.Habit.created_at, models.Habit.title, models.Habit.id


# --- habits ---

def create_habit(db: Session, habit: HabitCreate, today: Optional[datetime] = None):
    title = habit.title.strip()
    if not title:
        raise ValidationError("Habit title must not be empty")
    for week_day in habit.week_days:
        if not SUNDAY <= week_day <= SATURDAY:
            raise ValidationError(f"Week day out of range: {week_day}")

    created_at = day_boundary(today or current_day())
    db_habit = models.Habit(
        title=title,
        created_at=created_at,
        weekdays=[models.HabitWeekDay(week_day=d) for d in sorted(set(habit.week_days))],
    )
    db.add(db_habit)
    db.commit()
    db.refresh(db_habit)
    logger.info(f"Habit created: id={db_habit.id}, week_days={db_habit.week_days}")
    return db_habit


def get_habit(db: Session, habit_id):
    parsed = _parse_id(habit_id)
    if parsed is None:
        return None
    return db.get(models.Habit, parsed)


def habit_exists(db: Session, habit_id) -> bool:
    return get_habit(db, habit_id) is not None


def get_habits(db: Session):
    return db.scalars(select(models.Habit).order_by(*_habit_order())).all()


def get_possible_habits(db: Session, date: DateLike):
    day = day_boundary(date)
    stmt = (
        select(models.Habit)
        .join(models.HabitWeekDay, models.HabitWeekDay.habit_id == models.Habit.id)
        .where(schedulable_on(day, weekday_of(day)))
        .order_by(*_habit_order())
    )
    return db.scalars(stmt).all()


# --- days and completions ---

def get_day(db: Session, date: DateLike):
    return db.scalars(
        select(models.Day).where(models.Day.date == day_boundary(date))
    ).first()


def get_or_create_day(db: Session, date: DateLike):
    day = get_day(db, date)
    if day:
        return day

    boundary = day_boundary(date)
    try:
        day = _insert_unique(db, models.Day(date=boundary, week_day=weekday_of(boundary)))
    except ConflictError:
        logger.info(f"Day {boundary.date()} created concurrently, reusing it")
        day = get_day(db, boundary)
    else:
        logger.info(f"Day created: id={day.id}, date={boundary.date()}")
    db.commit()
    return day


def _find_day_habit(db: Session, day_id: str, habit_id: str):
    return db.scalars(
        select(models.DayHabit).where(
            models.DayHabit.day_id == day_id,
            models.DayHabit.habit_id == habit_id,
        )
    ).first()


def toggle_day_habit(db: Session, day_id, habit_id) -> ToggleResult:
    habit = get_habit(db, habit_id)
    if habit is None:
        raise NotFoundError(f"Habit not found: {habit_id}")
    day = db.get(models.Day, day_id)
    if day is None:
        raise NotFoundError(f"Day not found: {day_id}")

    day_habit = _find_day_habit(db, day.id, habit.id)
    if day_habit:
        db.delete(day_habit)
        db.commit()
        logger.info(f"Habit {habit.id} uncompleted on {day.date.date()}")
        return ToggleResult.UNCOMPLETED_NOW

    try:
        _insert_unique(db, models.DayHabit(day_id=day.id, habit_id=habit.id))
    except ConflictError:
        logger.info(f"Habit {habit.id} completed concurrently on {day.date.date()}")
    db.commit()
    logger.info(f"Habit {habit.id} completed on {day.date.date()}")
    return ToggleResult.COMPLETED_NOW


def toggle_habit(db: Session, habit_id, today: Optional[datetime] = None) -> ToggleResult:
    if not habit_exists(db, habit_id):
        raise NotFoundError(f"Habit not found: {habit_id}")
    day = get_or_create_day(db, today or current_day())
    return toggle_day_habit(db, day.id, habit_id)


def get_completed_habit_ids(db: Session, date: DateLike) -> set:
    stmt = (
        select(models.DayHabit.habit_id)
        .join(models.Day, models.Day.id == models.DayHabit.day_id)
        .where(models.Day.date == day_boundary(date))
    )
    return set(db.scalars(stmt).all())
