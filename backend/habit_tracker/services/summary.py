"""Per-day completion history.

One ``SELECT`` over ``days`` with two correlated counts, so the whole
history is read in a single round-trip:

* ``completed``: completion records of the day;
* ``amount``: habits schedulable on the day, by the same ``schedulable_on``
  rule that ``GET /day`` uses, fed with the weekday stored on the day row.
"""
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .. import models
from ..crud import schedulable_on

logger = logging.getLogger(__name__)


def summary_query():
    Day = models.Day

    completed = (
        select(func.count(models.DayHabit.id))
        .where(models.DayHabit.day_id == Day.id)
        .correlate(Day)
        .scalar_subquery()
    )
    amount = (
        select(func.count(models.HabitWeekDay.id))
        .join(models.Habit, models.Habit.id == models.HabitWeekDay.habit_id)
        .where(schedulable_on(Day.date, Day.week_day))
        .correlate(Day)
        .scalar_subquery()
    )
    return (
        select(
            Day.id.label("day_id"),
            Day.date.label("date"),
            completed.label("completed"),
            amount.label("amount"),
        )
        .order_by(Day.date)
    )


def get_summary(db: Session):
    rows = db.execute(summary_query()).all()
    logger.debug(f"Summary built for {len(rows)} days")
    return [
        {
            "day_id": row.day_id,
            "date": row.date,
            "completed": int(row.completed),
            "amount": int(row.amount),
        }
        for row in rows
    ]
