from datetime import timedelta

from habit_tracker import crud
from habit_tracker.schemas import HabitCreate
from habit_tracker.services.summary import get_summary

from .conftest import MONDAY

WEDNESDAY = MONDAY + timedelta(days=2)


def make_habit(db, title, week_days, today=MONDAY):
    return crud.create_habit(db, HabitCreate(title=title, week_days=week_days), today=today)


def toggle_on(db, habit, date):
    day = crud.get_or_create_day(db, date)
    return crud.toggle_day_habit(db, day.id, habit.id)


def test_summary_is_empty_without_activity(db):
    make_habit(db, "Exercise", [1, 3, 5])
    assert get_summary(db) == []


def test_single_toggle_produces_one_entry(db):
    exercise = make_habit(db, "Exercise", [1, 3, 5])
    make_habit(db, "Read", [1])
    make_habit(db, "Swim", [2])

    toggle_on(db, exercise, MONDAY)
    summary = get_summary(db)

    assert len(summary) == 1
    entry = summary[0]
    assert entry["date"] == MONDAY
    assert entry["day_id"] == crud.get_day(db, MONDAY).id
    assert entry["completed"] == 1
    assert entry["amount"] == 2
    assert isinstance(entry["completed"], int)
    assert isinstance(entry["amount"], int)


def test_amount_ignores_habits_created_later(db):
    early = make_habit(db, "Early", [1, 3], today=MONDAY)
    make_habit(db, "Late", [1, 3], today=WEDNESDAY)

    toggle_on(db, early, MONDAY)
    toggle_on(db, early, WEDNESDAY)
    summary = get_summary(db)

    assert [(e["date"], e["amount"]) for e in summary] == [(MONDAY, 1), (WEDNESDAY, 2)]


def test_amount_matches_possible_habits(db):
    habits = [
        make_habit(db, "A", [0, 1, 2], today=MONDAY - timedelta(days=3)),
        make_habit(db, "B", [3, 4], today=MONDAY),
        make_habit(db, "C", [1, 3, 5], today=MONDAY + timedelta(days=1)),
        make_habit(db, "D", [], today=MONDAY),
    ]
    for offset in range(10):
        toggle_on(db, habits[0], MONDAY + timedelta(days=offset))

    for entry in get_summary(db):
        assert entry["amount"] == len(crud.get_possible_habits(db, entry["date"]))


def test_untoggled_day_stays_with_zero_completed(db):
    habit = make_habit(db, "Exercise", [1])
    toggle_on(db, habit, MONDAY)
    toggle_on(db, habit, MONDAY)

    assert get_summary(db) == [
        {"day_id": crud.get_day(db, MONDAY).id, "date": MONDAY, "completed": 0, "amount": 1},
    ]


def test_completed_can_exceed_amount(db):
    habit = make_habit(db, "Weekend only", [0, 6])
    toggle_on(db, habit, MONDAY)

    entry = get_summary(db)[0]
    assert entry["completed"] == 1
    assert entry["amount"] == 0


def test_summary_is_ordered_by_date(db):
    habit = make_habit(db, "Exercise", [1, 3], today=MONDAY - timedelta(days=14))
    for date in (WEDNESDAY, MONDAY - timedelta(days=7), MONDAY):
        toggle_on(db, habit, date)

    dates = [e["date"] for e in get_summary(db)]
    assert dates == sorted(dates)
    assert len(dates) == 3
