"""
Running plan generator with an 80/20 easy/quality mileage split.

This module creates structured multi-week running plans based on:
- Race distance (fixed plan length and mileage progression per distance)
- Current and target pace (linearly interpolated across the plan)
- Weekly training-day budget (limits quality sessions and trims run days)

Every week is derived independently from the inputs; nothing is shared
between weeks or between calls.
"""

import logging
from typing import Dict, List, Set, Tuple

from run_planner.config import MAX_TRAINING_DAYS, MIN_TRAINING_DAYS
from run_planner.pace import (
    format_pace,
    get_easy_pace,
    get_interval_pace,
    get_recovery_pace,
    get_tempo_pace,
    normalize_pace,
    pace_to_seconds,
    round_half_up,
    seconds_to_pace,
)
from run_planner.plan_schemas import (
    DISTANCE_INFO,
    WEEKDAYS,
    DayType,
    Pace,
    RaceDistance,
    TrainingDay,
    TrainingPhase,
    TrainingPlan,
    TrainingWeek,
    Weekday,
)

logger = logging.getLogger(__name__)

# Weekly mileage (km) at progress p: base + slope * p
BASE_MILEAGE: Dict[RaceDistance, Tuple[float, float]] = {
    RaceDistance.FIVE_K: (15, 10),
    RaceDistance.TEN_K: (20, 15),
    RaceDistance.HALF: (25, 20),
    RaceDistance.FULL: (30, 30),
}

TAPER_MILEAGE_MULTIPLIER = 0.6

# Days downgraded to rest, first to last, when the week has too many run days
REMOVAL_ORDER = [
    Weekday.FRIDAY,
    Weekday.SUNDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.SATURDAY,
]
# Race day itself is never removed
RACE_WEEK_REMOVAL_ORDER = [
    Weekday.WEDNESDAY,
    Weekday.FRIDAY,
    Weekday.TUESDAY,
    Weekday.SATURDAY,
    Weekday.THURSDAY,
]


def get_phase(progress: float) -> TrainingPhase:
    """
    Classify a week by its position in the plan.

    Args:
        progress: week_num / total_weeks, in (0, 1]

    Returns:
        TrainingPhase for the week
    """
    if progress < 0.25:
        return TrainingPhase.BASE
    elif progress < 0.5:
        return TrainingPhase.BUILD
    elif progress < 0.85:
        return TrainingPhase.PEAK
    else:
        return TrainingPhase.TAPER


def get_weekly_mileage(distance: RaceDistance, progress: float, phase: TrainingPhase) -> int:
    """Weekly mileage target in km, reduced during the taper."""
    base, slope = BASE_MILEAGE[distance]
    multiplier = TAPER_MILEAGE_MULTIPLIER if phase == TrainingPhase.TAPER else 1.0
    return round_half_up((base + slope * progress) * multiplier)


def get_quality_session_count(phase: TrainingPhase, training_days: int) -> int:
    """
    Determine how many quality (interval/tempo) sessions fit into the week.

    Base Building and Taper default to 1 session, Build and Peak to 2. Small
    weekly budgets cap the count further: 4 days allows at most 2 sessions,
    fewer than 4 days at most 1.

    Args:
        phase: Training phase for the week
        training_days: Requested training days per week

    Returns:
        Number of quality sessions (0-2)
    """
    if phase in (TrainingPhase.BASE, TrainingPhase.TAPER):
        sessions = 1
    else:
        sessions = 2

    if training_days >= 5:
        return sessions
    elif training_days == 4:
        return min(sessions, 2)
    else:
        return min(sessions, 1)


def get_quality_mileage(weekly_mileage: int, phase: TrainingPhase, sessions: int) -> Tuple[int, int]:
    """
    Split the quality budget between interval and tempo work.

    The quality total is capped at 22% of the weekly mileage (15% in the
    taper) so easy running keeps roughly 80% of the volume.

    Args:
        weekly_mileage: Weekly mileage target in km
        phase: Training phase for the week
        sessions: Number of quality sessions

    Returns:
        Tuple of (interval_km, tempo_km)
    """
    light_phase = phase in (TrainingPhase.BASE, TrainingPhase.TAPER)
    target_quality = weekly_mileage * (0.12 if light_phase else 0.20)

    if sessions >= 2:
        interval_km = max(3, round_half_up(target_quality * 0.4))
        tempo_km = max(3, round_half_up(target_quality * 0.6))
    elif sessions == 1:
        interval_km = 0
        tempo_km = max(3, round_half_up(target_quality))
    else:
        return 0, 0

    quality_cap = round_half_up(
        weekly_mileage * (0.15 if phase == TrainingPhase.TAPER else 0.22)
    )
    total = interval_km + tempo_km
    if total > quality_cap:
        scale = quality_cap / total
        if interval_km > 0:
            interval_km = max(2, round_half_up(interval_km * scale))
        tempo_km = max(3, round_half_up(tempo_km * scale))

    return interval_km, tempo_km


def allocate_easy_mileage(easy_mileage: int) -> Dict[Weekday, int]:
    """
    Distribute easy mileage over the non-quality days.

    Priority order: Saturday long run (45%, at least 6 km), Wednesday (20%,
    at least 3 km), Sunday recovery (20%, at least 3 km), and whatever is
    left goes to an optional Friday run. Each share is capped by what remains.

    Args:
        easy_mileage: Easy km available for the week

    Returns:
        Mapping of weekday to km for Wednesday, Friday, Saturday and Sunday
    """
    easy_mileage = max(0, easy_mileage)

    long_run = min(max(round_half_up(easy_mileage * 0.45), 6), easy_mileage)
    remaining = easy_mileage - long_run

    wednesday = min(max(round_half_up(easy_mileage * 0.2), 3), remaining)
    remaining -= wednesday

    sunday = min(max(round_half_up(easy_mileage * 0.2), 3), remaining)
    remaining -= sunday

    return {
        Weekday.WEDNESDAY: wednesday,
        Weekday.FRIDAY: remaining,
        Weekday.SATURDAY: long_run,
        Weekday.SUNDAY: sunday,
    }


def _rest_day(day: Weekday) -> TrainingDay:
    return TrainingDay(
        day=day,
        workout="Rest",
        description="Rest day to stay within your weekly training days - recover for the next session",
        day_type=DayType.REST,
    )


def _build_days(
    progress: float,
    week_pace: Pace,
    weekly_mileage: int,
    sessions: int,
    interval_km: int,
    tempo_km: int,
    easy_km: Dict[Weekday, int],
) -> List[TrainingDay]:
    """
    Build the untrimmed Monday..Sunday schedule.

    Returns:
        List of seven TrainingDay values in calendar order
    """
    easy_pace = get_easy_pace(week_pace)
    recovery_pace = get_recovery_pace(week_pace)

    days = [
        TrainingDay(
            day=Weekday.MONDAY,
            workout="Rest or Cross-Training",
            description="Active recovery - light yoga, swimming, or complete rest",
            day_type=DayType.REST,
        )
    ]

    if sessions >= 2:
        interval_pace = get_interval_pace(week_pace)
        reps = min(6 + int(progress * 4), 10)
        days.append(
            TrainingDay(
                day=Weekday.TUESDAY,
                workout="Interval Training",
                description=f"{reps}x400m at {interval_pace} with 90s recovery, warm up and cool down easy",
                day_type=DayType.QUALITY,
                pace=interval_pace,
                distance=f"{interval_km} km",
            )
        )
    else:
        days.append(
            TrainingDay(
                day=Weekday.TUESDAY,
                workout="Strides + Drills",
                description=f"Easy running at {easy_pace} finished with 6x20s relaxed strides and form drills",
                day_type=DayType.EASY,
                pace=easy_pace,
                distance="3-4 km easy + strides",
            )
        )

    wednesday_km = easy_km[Weekday.WEDNESDAY]
    if wednesday_km > 0:
        days.append(
            TrainingDay(
                day=Weekday.WEDNESDAY,
                workout="Easy Zone 2 Run",
                description=f"Conversational pace run at {easy_pace}",
                day_type=DayType.EASY,
                pace=easy_pace,
                distance=f"{wednesday_km} km",
            )
        )
    else:
        days.append(
            TrainingDay(
                day=Weekday.WEDNESDAY,
                workout="Rest or Easy Walk",
                description="No easy mileage left for midweek - rest or walk",
                day_type=DayType.REST,
                distance="Optional rest",
            )
        )

    if sessions >= 1:
        tempo_pace = get_tempo_pace(week_pace)
        days.append(
            TrainingDay(
                day=Weekday.THURSDAY,
                workout="Tempo / Threshold Run",
                description=f"Sustained, comfortably hard effort at {tempo_pace} for {tempo_km} km",
                day_type=DayType.QUALITY,
                pace=tempo_pace,
                distance=f"{tempo_km} km",
            )
        )
    else:
        days.append(
            TrainingDay(
                day=Weekday.THURSDAY,
                workout="Easy Zone 2 Run",
                description=f"Steady aerobic run at {easy_pace}",
                day_type=DayType.EASY,
                pace=easy_pace,
                distance=f"{max(4, round_half_up(weekly_mileage * 0.2))} km",
            )
        )

    friday_km = easy_km[Weekday.FRIDAY]
    if friday_km > 0:
        days.append(
            TrainingDay(
                day=Weekday.FRIDAY,
                workout="Optional Easy Run",
                description=f"Short shakeout at {easy_pace}, or rest if legs feel heavy",
                day_type=DayType.EASY,
                pace=easy_pace,
                distance=f"{friday_km} km",
            )
        )
    else:
        days.append(
            TrainingDay(
                day=Weekday.FRIDAY,
                workout="Rest",
                description="Rest before the long run",
                day_type=DayType.REST,
                distance="Rest",
            )
        )

    days.append(
        TrainingDay(
            day=Weekday.SATURDAY,
            workout="Long Zone 2 Run",
            description=f"Build endurance at {easy_pace}, keep the effort conversational",
            day_type=DayType.LONG,
            pace=easy_pace,
            distance=f"{easy_km[Weekday.SATURDAY]} km",
        )
    )

    sunday_km = easy_km[Weekday.SUNDAY]
    days.append(
        TrainingDay(
            day=Weekday.SUNDAY,
            workout="Recovery Run",
            description=f"Very easy pace at {recovery_pace}",
            day_type=DayType.RECOVERY if sunday_km > 0 else DayType.REST,
            pace=recovery_pace if sunday_km > 0 else None,
            distance=f"{sunday_km} km" if sunday_km > 0 else "Rest",
        )
    )

    return days


def _race_weekend(distance: RaceDistance, target_pace: Pace) -> Tuple[TrainingDay, TrainingDay]:
    info = DISTANCE_INFO[distance]
    shakeout = TrainingDay(
        day=Weekday.SATURDAY,
        workout="Pre-Race Shakeout",
        description="Short, easy 2-3 km jog with a few strides",
        day_type=DayType.EASY,
        pace=get_easy_pace(target_pace),
        distance="2-3 km",
    )
    race = TrainingDay(
        day=Weekday.SUNDAY,
        workout=f"RACE DAY - {info.name}",
        description=f"Target pace: {format_pace(target_pace)} - Go get your PR!",
        day_type=DayType.QUALITY,
        pace=format_pace(target_pace),
        distance=info.km_label,
    )
    return shakeout, race


def select_rest_days(days: List[TrainingDay], training_days: int, race_week: bool) -> Set[Weekday]:
    """
    Choose which active days to downgrade to rest.

    Args:
        days: Untrimmed schedule for the week
        training_days: Maximum number of active days
        race_week: Whether this is the final week (race day is protected)

    Returns:
        Set of weekdays to replace with rest days
    """
    order = RACE_WEEK_REMOVAL_ORDER if race_week else REMOVAL_ORDER
    by_day = {d.day: d for d in days}
    active = sum(1 for d in days if d.is_active)

    rested: Set[Weekday] = set()
    for weekday in order:
        if active <= training_days:
            break
        if by_day[weekday].is_active:
            rested.add(weekday)
            active -= 1
    return rested


def generate_weekly_plan(
    week_num: int,
    total_weeks: int,
    distance: RaceDistance,
    current_pace: Pace,
    target_pace: Pace,
    training_days: int,
) -> TrainingWeek:
    """
    Generate a single week of training.

    Args:
        week_num: Week number (1-based)
        total_weeks: Plan length in weeks
        distance: Target race distance
        current_pace: Normalized current pace
        target_pace: Normalized target pace
        training_days: Maximum active days for the week (trusted, not clamped)

    Returns:
        TrainingWeek with seven days
    """
    progress = week_num / total_weeks
    current_seconds = pace_to_seconds(current_pace)
    target_seconds = pace_to_seconds(target_pace)
    week_pace = seconds_to_pace(current_seconds - (current_seconds - target_seconds) * progress)

    phase = get_phase(progress)
    weekly_mileage = get_weekly_mileage(distance, progress, phase)
    sessions = get_quality_session_count(phase, training_days)
    interval_km, tempo_km = get_quality_mileage(weekly_mileage, phase, sessions)
    easy_km = allocate_easy_mileage(weekly_mileage - interval_km - tempo_km)

    days = _build_days(
        progress=progress,
        week_pace=week_pace,
        weekly_mileage=weekly_mileage,
        sessions=sessions,
        interval_km=interval_km,
        tempo_km=tempo_km,
        easy_km=easy_km,
    )

    race_week = week_num == total_weeks
    if race_week:
        shakeout, race = _race_weekend(distance, target_pace)
        days[WEEKDAYS.index(Weekday.SATURDAY)] = shakeout
        days[WEEKDAYS.index(Weekday.SUNDAY)] = race

    rested = select_rest_days(days, training_days, race_week)
    final_days = [_rest_day(d.day) if d.day in rested else d for d in days]

    logger.debug(
        "Week %d/%d: phase=%s mileage=%dkm pace=%s quality=%d (interval=%dkm tempo=%dkm) rested=%s",
        week_num,
        total_weeks,
        phase.value,
        weekly_mileage,
        format_pace(week_pace),
        sessions,
        interval_km,
        tempo_km,
        sorted(d.value for d in rested),
    )

    return TrainingWeek(
        week=week_num,
        phase=phase,
        days=final_days,
        total_mileage=f"{weekly_mileage} km",
    )


def clamp_training_days(training_days: int) -> int:
    return max(MIN_TRAINING_DAYS, min(MAX_TRAINING_DAYS, training_days))


def build_summary(
    distance: RaceDistance,
    current_pace: Pace,
    target_pace: Pace,
    training_days: int,
) -> str:
    """
    Compose the plan summary paragraph.

    The improvement clause depends on the sign of the projected race-time
    change: faster target, slower target, or unchanged pace.
    """
    info = DISTANCE_INFO[distance]
    pace_improvement = pace_to_seconds(current_pace) - pace_to_seconds(target_pace)
    time_improvement = round_half_up(pace_improvement * info.km / 60)

    if time_improvement > 0:
        outcome = (
            f"That's a potential improvement of ~{time_improvement} minutes "
            f"on your {info.name} time!"
        )
    elif time_improvement < 0:
        outcome = (
            f"That target would add roughly {abs(time_improvement)} minutes "
            f"to your {info.name} time, so double-check that goal."
        )
    else:
        outcome = "This plan keeps you steady at your current pace while you build consistency."

    return (
        f"This {info.weeks}-week {info.name} plan takes you from {format_pace(current_pace)} "
        f"to {format_pace(target_pace)} per kilometer, training {training_days} days/week. "
        f"{outcome} Around 80% of your weekly mileage stays easy (Zone 2), "
        f"with a controlled block of interval and tempo work for the rest."
    )


def generate_training_plan(
    distance: RaceDistance,
    current_pace: Pace,
    target_pace: Pace,
    training_days: int,
) -> TrainingPlan:
    """
    Generate a complete running plan.

    Args:
        distance: Target race distance (a RaceDistance or its string value)
        current_pace: Current average pace
        target_pace: Target average pace
        training_days: Training days per week, clamped to 3-6

    Returns:
        TrainingPlan with every week generated

    Raises:
        ValueError: If distance is not a known race distance
    """
    distance = RaceDistance(distance)
    info = DISTANCE_INFO[distance]
    weeks_count = info.weeks

    current = normalize_pace(current_pace)
    target = normalize_pace(target_pace)

    days = clamp_training_days(training_days)
    if days != training_days:
        logger.warning(
            "training_days=%d outside %d-%d, using %d",
            training_days,
            MIN_TRAINING_DAYS,
            MAX_TRAINING_DAYS,
            days,
        )

    logger.info(
        "Generating %d-week %s plan: %s -> %s, %d days/week",
        weeks_count,
        info.name,
        format_pace(current),
        format_pace(target),
        days,
    )

    weeks = [
        generate_weekly_plan(week_num, weeks_count, distance, current, target, days)
        for week_num in range(1, weeks_count + 1)
    ]

    return TrainingPlan(
        distance=distance,
        current_pace=current,
        target_pace=target,
        training_days=days,
        weeks=weeks,
        summary=build_summary(distance, current, target, days),
    )
