# Items of the collection fields edited during planning.

from datetime import date, datetime
from pydantic import AfterValidator, BaseModel, Field
from typing import Annotated, Optional, List


def clock_time(value: str) -> str:
    """Accept a 24h "HH:MM" time and return it unchanged."""
    try:
        datetime.strptime(value, "%H:%M")
    except ValueError:
        raise ValueError("Time must be HH:MM between 00:00 and 23:59")
    if len(value) != 5:
        raise ValueError("Time must be HH:MM between 00:00 and 23:59")
    return value


ClockTime = Annotated[str, AfterValidator(clock_time)]


class StorySegmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    duration: str = "30 seconds"
    act: str = "setup"
    location: str = ""
    location_type: str = "Indoor"


class StorySegmentUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    act: Optional[str] = None
    location: Optional[str] = None
    location_type: Optional[str] = None


class LocationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: str = "Indoor"
    address: str = ""
    notes: str = ""
    equipment_needed: List[str] = []
    coordinates: Optional[List[float]] = None


class LocationUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    equipment_needed: Optional[List[str]] = None
    coordinates: Optional[List[float]] = None


class ScheduleItemCreate(BaseModel):
    title: str = Field(..., min_length=1)
    type: str = "shoot"
    date: str = Field(default_factory=lambda: date.today().isoformat())
    start_time: ClockTime = "09:00"
    end_time: ClockTime = "17:00"
    location: str = ""
    scenes: List[int] = []
    crew: List[str] = []
    notes: str = ""
    weather_consideration: bool = False


class ScheduleItemUpdate(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    date: Optional[str] = None
    start_time: Optional[ClockTime] = None
    end_time: Optional[ClockTime] = None
    location: Optional[str] = None
    scenes: Optional[List[int]] = None
    crew: Optional[List[str]] = None
    notes: Optional[str] = None
    weather_consideration: Optional[bool] = None


class ScheduleDay(BaseModel):
    date: str
    items: List[dict]
