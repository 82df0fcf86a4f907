"""
Data schemas for running plan generation.

This module contains Pydantic models for representing structured running plans,
including paces, race distance metadata, weekly schedules and daily workouts.
All models are immutable; a plan is built once and never modified afterwards.
"""

import math
import re
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


_DISTANCE_NUMBER = re.compile(r"(\d+(?:\.\d+)?)")


class RaceDistance(str, Enum):
    """Supported race distances."""

    FIVE_K = "5k"
    TEN_K = "10k"
    HALF = "half"
    FULL = "full"


class Weekday(str, Enum):
    """Days of the week."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


WEEKDAYS: List[Weekday] = list(Weekday)


class DayType(str, Enum):
    """Classification of a training day."""

    REST = "rest"
    EASY = "easy"
    QUALITY = "quality"
    LONG = "long"
    RECOVERY = "recovery"


class TrainingPhase(str, Enum):
    """Training plan phases, valued by their display label."""

    BASE = "Base Building"
    BUILD = "Build Phase"
    PEAK = "Peak Training"
    TAPER = "Taper"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Pace(_FrozenModel):
    """
    Running pace as time per kilometer.

    Raw input is normalized on construction: seconds >= 60 carry into minutes,
    fractional seconds are rounded and negative durations floor at 0:00.
    """

    minutes: int = Field(..., ge=0, description="Whole minutes per kilometer")
    seconds: int = Field(..., ge=0, le=59, description="Remaining seconds (0-59)")

    @model_validator(mode="before")
    @classmethod
    def normalize(cls, data):
        """Carry overflowing seconds into minutes and clamp at zero."""
        if not isinstance(data, dict) or "minutes" not in data or "seconds" not in data:
            return data
        minutes = data["minutes"]
        seconds = data["seconds"]
        if not isinstance(minutes, (int, float)) or not isinstance(seconds, (int, float)):
            return data
        total = max(0, math.floor(minutes * 60 + seconds + 0.5))
        return {"minutes": total // 60, "seconds": total % 60}

    def __str__(self) -> str:
        return f"{self.minutes}:{self.seconds:02d}/km"


class DistanceInfo(_FrozenModel):
    """Static metadata for a race distance."""

    name: str = Field(..., description="Display name (e.g. 'Half Marathon')")
    km: float = Field(..., gt=0, description="Race distance in kilometers")
    miles: float = Field(..., gt=0, description="Race distance in miles")
    weeks: int = Field(..., ge=1, description="Total plan length in weeks")

    @property
    def km_label(self) -> str:
        """Distance as shown on race day, e.g. '5 km' or '21.1 km'."""
        return f"{self.km:g} km"


DISTANCE_INFO: Mapping[RaceDistance, DistanceInfo] = MappingProxyType(
    {
        RaceDistance.FIVE_K: DistanceInfo(name="5K", km=5, miles=3.1, weeks=8),
        RaceDistance.TEN_K: DistanceInfo(name="10K", km=10, miles=6.2, weeks=10),
        RaceDistance.HALF: DistanceInfo(name="Half Marathon", km=21.1, miles=13.1, weeks=12),
        RaceDistance.FULL: DistanceInfo(name="Marathon", km=42.2, miles=26.2, weeks=16),
    }
)


class TrainingDay(_FrozenModel):
    """
    A single calendar day within a training week.

    Rest days carry no pace; their distance is either absent or a label such
    as "Rest" or "Optional rest".
    """

    day: Weekday = Field(..., description="Day of the week")
    workout: str = Field(..., min_length=1, description="Workout title")
    description: str = Field(..., description="Human-readable workout description")
    day_type: Optional[DayType] = Field(None, description="Classification of the day")
    pace: Optional[str] = Field(None, description="Target pace, e.g. '5:45/km'")
    distance: Optional[str] = Field(None, description="Distance label, e.g. '8 km'")

    @property
    def is_active(self) -> bool:
        """Whether this day counts towards the weekly training-day budget."""
        return self.day_type is not None and self.day_type != DayType.REST

    @property
    def distance_km(self) -> Optional[float]:
        """Leading number of the distance label in km, if any."""
        if not self.distance:
            return None
        match = _DISTANCE_NUMBER.search(self.distance)
        return float(match.group(1)) if match else None


class TrainingWeek(_FrozenModel):
    """
    Single week of training within a plan.

    Always holds exactly seven days in Monday..Sunday order.
    """

    week: int = Field(..., ge=1, description="Week number in the plan (1-based)")
    phase: TrainingPhase = Field(..., description="Training phase for this week")
    days: List[TrainingDay] = Field(..., description="Daily workouts, Monday first")
    total_mileage: str = Field(..., description="Weekly mileage target, e.g. '32 km'")

    @field_validator("days")
    @classmethod
    def validate_days(cls, v: List[TrainingDay]) -> List[TrainingDay]:
        """Ensure the week is complete and in calendar order."""
        if [d.day for d in v] != WEEKDAYS:
            raise ValueError("A training week must list Monday through Sunday exactly once, in order")
        return v

    @property
    def weekly_mileage_km(self) -> int:
        return int(_DISTANCE_NUMBER.search(self.total_mileage).group(1))

    def get_day(self, weekday: Weekday) -> TrainingDay:
        return self.days[WEEKDAYS.index(Weekday(weekday))]

    def active_day_count(self) -> int:
        return sum(1 for d in self.days if d.is_active)

    def mileage_by_type(self) -> Dict[str, float]:
        """
        Sum day distances per day type.

        Returns:
            Dictionary keyed by day type value; days without a numeric
            distance contribute nothing.
        """
        totals = {day_type.value: 0.0 for day_type in DayType}
        for d in self.days:
            if d.day_type is None or d.distance_km is None:
                continue
            totals[d.day_type.value] += d.distance_km
        return totals

    def quality_fraction(self) -> float:
        """Share of the weekly mileage target run on quality days."""
        if self.weekly_mileage_km == 0:
            return 0.0
        return self.mileage_by_type()[DayType.QUALITY.value] / self.weekly_mileage_km


class TrainingPlan(_FrozenModel):
    """
    Complete multi-week running plan.

    Contains the normalized inputs, every week of the plan and a one-paragraph
    summary suitable for display.
    """

    distance: RaceDistance = Field(..., description="Target race distance")
    current_pace: Pace = Field(..., description="Normalized current average pace")
    target_pace: Pace = Field(..., description="Normalized target average pace")
    training_days: int = Field(..., ge=1, le=7, description="Training days per week")
    weeks: List[TrainingWeek] = Field(..., min_length=1, description="All weeks in the plan")
    summary: str = Field(..., description="Human-readable plan summary")

    @field_validator("weeks")
    @classmethod
    def validate_weeks(cls, v: List[TrainingWeek]) -> List[TrainingWeek]:
        """Validate week numbering is sequential starting from 1."""
        for i, week in enumerate(v, start=1):
            if week.week != i:
                raise ValueError(
                    f"Week numbering must be sequential. Expected week {i}, got week {week.week}"
                )
        return v

    @property
    def info(self) -> DistanceInfo:
        return DISTANCE_INFO[self.distance]

    @property
    def race_week(self) -> TrainingWeek:
        return self.weeks[-1]

    def total_mileage_km(self) -> int:
        return sum(week.weekly_mileage_km for week in self.weeks)

    def get_phase_breakdown(self) -> Dict[str, int]:
        """
        Get the number of weeks in each training phase.

        Returns:
            Dictionary mapping phase labels to week counts, in plan order.
        """
        phase_counts: Dict[str, int] = {}
        for week in self.weeks:
            phase_counts[week.phase.value] = phase_counts.get(week.phase.value, 0) + 1
        return phase_counts
