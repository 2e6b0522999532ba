"""
Performance trend analysis.

Compares the most recent window of sessions against the window before it,
classifies the trend and emits advisory recommendations.  Nothing here is
authoritative: the output only informs future schedule adjustments.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import (
    CONFIDENCE_FULL_SESSIONS,
    INSUFFICIENT_HISTORY_CONFIDENCE,
    INTENSITY_REDUCTION_FRACTION,
    MIN_SESSIONS_FOR_ANALYSIS,
    WEIGHT_INCREASE_FRACTION,
    EngineSettings,
)
from .metrics import consistency_score, percentage_change, window_metrics
from .models import (
    KeyMetrics,
    PerformanceAnalysis,
    Recommendation,
    SessionRecord,
    Trend,
    WindowMetrics,
)

logger = logging.getLogger(__name__)

_DEFAULT_SETTINGS = EngineSettings()


def classify_trend(
    volume_change_pct: float,
    intensity_change_pct: float,
    settings: EngineSettings = _DEFAULT_SETTINGS,
) -> Trend:
    """
    Classify the window-over-window trend.

    improving:  volume up more than 5% and intensity up
    declining:  volume down more than 5% or intensity down more than 10%
    plateauing: everything else
    """
    if volume_change_pct > settings.improving_volume_pct and intensity_change_pct > 0:
        return "improving"
    if (
        volume_change_pct < settings.declining_volume_pct
        or intensity_change_pct < settings.declining_intensity_pct
    ):
        return "declining"
    return "plateauing"


def analysis_confidence(session_count: int) -> float:
    """Confidence grows linearly with history size and saturates at 20 sessions."""
    return min(session_count / CONFIDENCE_FULL_SESSIONS, 1.0)


def generate_recommendations(
    recent: WindowMetrics,
    trend: Trend,
    settings: EngineSettings = _DEFAULT_SETTINGS,
) -> list[Recommendation]:
    """
    Recommendations for the recent window.  Each rule fires independently.

    The load recommendation is expressed in percent of the current load.
    """
    recommendations: list[Recommendation] = []

    if trend == "improving" and recent.completion_rate > settings.high_completion_rate:
        recommendations.append(
            Recommendation(
                type="increase_weight",
                current_value=100.0,
                recommended_value=100.0 * (1 + WEIGHT_INCREASE_FRACTION),
                reason="Strong recent performance; time to add load",
                confidence=0.8,
                priority="high",
            )
        )

    if recent.completion_rate < settings.low_completion_rate:
        recommendations.append(
            Recommendation(
                type="reduce_intensity",
                current_value=recent.average_intensity,
                recommended_value=recent.average_intensity * (1 - INTENSITY_REDUCTION_FRACTION),
                reason="Low set completion rate; ease off the intensity",
                confidence=0.7,
                priority="medium",
            )
        )

    if recent.average_rating < settings.low_rating:
        recommendations.append(
            Recommendation(
                type="change_exercise",
                current_value=0.0,
                recommended_value=1.0,
                reason="Low session ratings; vary the exercises",
                confidence=0.6,
                priority="medium",
            )
        )

    return recommendations


def analyze_performance(
    history: Sequence[SessionRecord],
    settings: EngineSettings = _DEFAULT_SETTINGS,
) -> PerformanceAnalysis:
    """
    Analyze recent performance.

    Args:
        history: Logged sessions in any order
        settings: Window size and thresholds

    Returns:
        PerformanceAnalysis.  With fewer than 3 sessions the trend defaults
        to improving with confidence 0.3, zeroed metrics and no
        recommendations.
    """
    if len(history) < MIN_SESSIONS_FOR_ANALYSIS:
        logger.debug("Only %d sessions; returning default analysis", len(history))
        return PerformanceAnalysis(
            trend="improving",
            confidence=INSUFFICIENT_HISTORY_CONFIDENCE,
            key_metrics=KeyMetrics(),
            recommendations=[],
        )

    ordered = sorted(history, key=lambda s: s.date)
    window = settings.analysis_window
    recent_sessions = ordered[-window:]
    previous_sessions = ordered[-2 * window : -window] if len(ordered) > window else []

    recent = window_metrics(recent_sessions)
    previous = window_metrics(previous_sessions)

    key_metrics = KeyMetrics(
        volume_change_pct=percentage_change(previous.average_volume, recent.average_volume),
        intensity_change_pct=percentage_change(
            previous.average_intensity, recent.average_intensity
        ),
        endurance_change_pct=percentage_change(
            previous.average_duration, recent.average_duration
        ),
        consistency_score=consistency_score(s.date for s in recent_sessions),
    )

    trend = classify_trend(
        key_metrics.volume_change_pct, key_metrics.intensity_change_pct, settings
    )
    confidence = analysis_confidence(len(history))
    recommendations = generate_recommendations(recent, trend, settings)

    logger.info(
        "Analysis over %d sessions: %s (confidence %.2f, %d recommendations)",
        len(history),
        trend,
        confidence,
        len(recommendations),
    )
    return PerformanceAnalysis(
        trend=trend,
        confidence=confidence,
        key_metrics=key_metrics,
        recommendations=recommendations,
    )


ADJUSTMENTS: dict[str, str] = {
    "increase_weight": "+5%",
    "reduce_intensity": "-10%",
    "change_exercise": "swap exercise",
}


def next_workout_adjustments(analysis: PerformanceAnalysis) -> dict[str, str]:
    """
    Map recommendations to adjustments for the next session.

    Returns:
        {recommendation type: adjustment label}, in recommendation order
    """
    return {
        rec.type: ADJUSTMENTS[rec.type]
        for rec in analysis.recommendations
        if rec.type in ADJUSTMENTS
    }
