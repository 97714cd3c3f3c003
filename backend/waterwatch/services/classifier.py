"""Threshold classification for water-quality metrics.

Each classifier maps a raw value to a band and its advisory text. Only pH,
turbidity and dissolved oxygen are evaluated; temperature and TDS are stored
without classification.
"""

from dataclasses import dataclass
from enum import Enum

from ..models.alert import Severity


class Band(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY HIGH"


@dataclass(frozen=True)
class Classification:
    band: Band
    advisory: str


PH_ACIDIC = Classification(Band.LOW, "LOW, The water is acidic, treat with alkaline solution to neutralise it")
PH_OPTIMUM = Classification(Band.MEDIUM, "MEDIUM / OPTIMUM, The water is ideal and safe for use")
PH_ALKALINE = Classification(Band.HIGH, "HIGH, The water is alkaline, treat with acidic solution to neutralize it")

TURBIDITY_OPTIMUM = Classification(Band.LOW, "LOW / OPTIMUM, The water is safe and good for use")
TURBIDITY_SLIGHT = Classification(
    Band.MEDIUM, "MEDIUM, The water is slightly turbid. Apply coagulation, sedimentation and filtration"
)
TURBIDITY_DANGEROUS = Classification(Band.HIGH, "HIGH, The water is dangerous. Do not use without treatment")

DO_POOR = Classification(Band.LOW, "LOW, Poor water quality. Improve aeration")
DO_ACCEPTABLE = Classification(Band.MEDIUM, "MEDIUM, Acceptable but monitor freshness")
DO_FRESH = Classification(Band.HIGH, "HIGH, Water is fresh and fit for consumption")
DO_CORROSIVE = Classification(Band.VERY_HIGH, "VERY HIGH, May increase corrosion risk. Degasify")

PH_MIN, PH_MAX = 6.5, 8.5
PH_CRITICAL_MIN = 5.0
TURBIDITY_MAX = 5.0
TURBIDITY_CRITICAL_MAX = 50.0
DO_MIN = 5.0


def classify_ph(ph: float) -> Classification:
    if ph < PH_MIN:
        return PH_ACIDIC
    if ph <= PH_MAX:
        return PH_OPTIMUM
    return PH_ALKALINE


def classify_turbidity(turbidity: float) -> Classification:
    if turbidity <= TURBIDITY_MAX:
        return TURBIDITY_OPTIMUM
    if turbidity <= TURBIDITY_CRITICAL_MAX:
        return TURBIDITY_SLIGHT
    return TURBIDITY_DANGEROUS


def classify_dissolved_oxygen(dissolved_oxygen: float) -> Classification:
    if dissolved_oxygen < DO_MIN:
        return DO_POOR
    if dissolved_oxygen <= 6.5:
        return DO_ACCEPTABLE
    if dissolved_oxygen <= 8:
        return DO_FRESH
    return DO_CORROSIVE


def needs_alert(ph: float, turbidity: float, dissolved_oxygen: float) -> bool:
    return ph < PH_MIN or ph > PH_MAX or turbidity > TURBIDITY_MAX or dissolved_oxygen < DO_MIN


def alert_severity(ph: float, turbidity: float) -> Severity:
    if turbidity > TURBIDITY_CRITICAL_MAX or ph < PH_CRITICAL_MIN:
        return Severity.CRITICAL
    return Severity.WARNING


def _fmt(value: float) -> str:
    # 7.0 -> "7", 4.5 -> "4.5"
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def alert_message(ph: float, turbidity: float) -> str:
    """Stored alert text; embeds the pH advisory only."""
    return f"Issue Detected: pH is {_fmt(ph)}, Turbidity is {_fmt(turbidity)}. Advisory: {classify_ph(ph).advisory}"
