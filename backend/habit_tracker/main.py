import logging
from datetime import datetime
from typing import List

from fastapi import FastAPI, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .config import LOG_LEVEL
from .database import SessionLocal, init_db
from . import crud, dates
from .errors import NotFoundError, ValidationError
from .schemas import DayResponse, HabitCreate, HabitResponse, SummaryEntry, ToggleResponse
from .services.summary import get_summary

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(redirect_slashes=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_today() -> datetime:
    return dates.today()


@app.on_event("startup")
def create_tables():
    init_db()
    logger.info("Database tables ready")


@app.post("/habits", response_model=HabitResponse, status_code=status.HTTP_201_CREATED)
def create_habit(
        habit: HabitCreate,
        db: Session = Depends(get_db),
        today: datetime = Depends(get_today)
):
    try:
        return crud.create_habit(db, habit, today=today)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.get("/habits", response_model=List[HabitResponse])
def read_habits(db: Session = Depends(get_db)):
    return crud.get_habits(db)


@app.get("/day", response_model=DayResponse)
def read_day(date: str, db: Session = Depends(get_db)):
    try:
        day = dates.parse_date(date)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    possible_habits = crud.get_possible_habits(db, day)
    completed_habits = crud.get_completed_habit_ids(db, day)
    return DayResponse(
        possible_habits=[HabitResponse.model_validate(h) for h in possible_habits],
        completed_habits=sorted(completed_habits),
    )


@app.patch("/habits/{habit_id}/toggle", response_model=ToggleResponse)
def toggle_habit(
        habit_id: str,
        db: Session = Depends(get_db),
        today: datetime = Depends(get_today)
):
    try:
        result = crud.toggle_habit(db, habit_id, today=today)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"status": "success", "completed": result is crud.ToggleResult.COMPLETED_NOW}


@app.get("/summary", response_model=List[SummaryEntry])
def read_summary(db: Session = Depends(get_db)):
    return get_summary(db)
