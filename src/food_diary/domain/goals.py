"""Domain models for daily goals and excess reporting."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

ExcessLevel = Literal["none", "low", "moderate", "high"]

DayStatus = Literal["normal", "excess", "significant_excess"]


@dataclass(frozen=True)
class DailyGoals:
    """Daily macro targets."""

    calories_target: float
    protein_target: float
    fat_target: float
    carbs_target: float


@dataclass(frozen=True)
class ActualConsumption:
    """Macros actually consumed during one day."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class DailyExcess:
    """Consumption above target for one day, never negative."""

    extra_calories: float
    extra_protein_g: float
    extra_fat_g: float
    extra_carbs_g: float


@dataclass(frozen=True)
class DailyExcessWithDate:
    """Daily excess tagged with its day."""

    day: date
    extra_calories: float
    extra_protein_g: float
    extra_fat_g: float
    extra_carbs_g: float


@dataclass(frozen=True)
class PeriodExcess:
    """Excess summed over a period with the per-day series."""

    total_extra_calories: float
    total_extra_protein_g: float
    total_extra_fat_g: float
    total_extra_carbs_g: float
    daily: list[DailyExcessWithDate]


@dataclass(frozen=True)
class SweetAndFlourCalories:
    """Calories from sweet and flour foods and their share of the excess."""

    total_sweet_calories: float
    total_flour_calories: float
    extra_sweet_calories: float
    extra_flour_calories: float


@dataclass(frozen=True)
class ExcessInterpretation:
    """Severity of the excess per macro plus the overall day status."""

    calories: ExcessLevel
    protein: ExcessLevel
    fat: ExcessLevel
    carbs: ExcessLevel
    day_status: DayStatus


@dataclass(frozen=True)
class PeriodReport:
    """Everything a dashboard needs for a range of days."""

    goals: DailyGoals
    excess: PeriodExcess
    sweet_and_flour: SweetAndFlourCalories
    interpretations: list[ExcessInterpretation] = field(default_factory=list)
