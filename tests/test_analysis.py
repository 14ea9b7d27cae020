################################################################################
# File Name: test_analysis.py
# Purpose/Description: Tests for statistics, trend detection and false-alarm filtering
# Author: Michael Cornelison
# Creation Date: 2026-10-12
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-12    | M. Cornelison | Initial implementation
# 2026-10-19    | M. Cornelison | Constant inexact window tests
# ================================================================================
################################################################################

"""
Tests for the analysis subpackage.

Run with:
    pytest tests/test_analysis.py -v
"""

import pytest

from analysis import (
    FalseAlarmFilter,
    InsufficientDataError,
    TrendDetector,
    calculateMean,
    calculateMeanDelta,
    calculatePopulationStandardDeviation,
    calculateZScore,
    detectTrend,
    extractValues,
    isLikelyFalseAlarm,
)
from vitals.types import Reading, RiskLevel, VitalKind

STABLE_WINDOW = [75, 76, 74, 75, 75, 76, 74, 75, 76, 75]
SPIKE_WINDOW = [75, 75, 76, 74, 75, 76, 74, 75, 75, 120]


# ================================================================================
# Calculations
# ================================================================================

class TestCalculations:
    """Tests for statistical helpers."""

    def test_calculateMean_values_returnsAverage(self):
        """
        Given: Values 2, 4, 6
        When: calculateMean() is called
        Then: Returns 4
        """
        assert calculateMean([2, 4, 6]) == 4

    def test_calculateMean_empty_raisesInsufficientDataError(self):
        """
        Given: Empty list
        When: calculateMean() is called
        Then: InsufficientDataError is raised
        """
        with pytest.raises(InsufficientDataError):
            calculateMean([])

    def test_populationStdDev_stableWindow_dividesByN(self):
        """
        Given: The stable heart rate window
        When: calculatePopulationStandardDeviation() is called
        Then: Returns 0.7 (population, not sample)
        """
        assert calculatePopulationStandardDeviation(STABLE_WINDOW) == pytest.approx(0.7)

    @pytest.mark.parametrize("value", [39.3, 39.7, 0.1, 91.1, 38.7])
    def test_populationStdDev_constantInexactValue_isZero(self, value):
        """
        Given: Ten copies of a value with no exact binary form
        When: calculatePopulationStandardDeviation() is called
        Then: Returns exactly 0.0
        """
        assert calculatePopulationStandardDeviation([value] * 10) == 0.0

    def test_calculateZScore_belowMean_isAbsolute(self):
        """
        Given: Value two deviations below the mean
        When: calculateZScore() is called
        Then: Returns a positive score
        """
        assert calculateZScore(70, 80, 5) == pytest.approx(2.0)

    def test_calculateZScore_zeroStdDev_raisesZeroDivision(self):
        """
        Given: Zero standard deviation
        When: calculateZScore() is called
        Then: ZeroDivisionError is raised
        """
        with pytest.raises(ZeroDivisionError):
            calculateZScore(75, 75, 0)

    def test_calculateMeanDelta_rising_returnsAverageStep(self):
        """
        Given: 70, 73, 76, 79, 82
        When: calculateMeanDelta() is called
        Then: Returns 3
        """
        assert calculateMeanDelta([70, 73, 76, 79, 82]) == pytest.approx(3.0)

    def test_calculateMeanDelta_singleValue_raisesInsufficientDataError(self):
        """
        Given: One value
        When: calculateMeanDelta() is called
        Then: InsufficientDataError is raised
        """
        with pytest.raises(InsufficientDataError):
            calculateMeanDelta([70])

    def test_extractValues_readingsAndNumbers_returnsFloats(self):
        """
        Given: Mixed readings and numbers
        When: extractValues() is called
        Then: Returns float values in order
        """
        items = [Reading(1, VitalKind.HEART_RATE, 75), 80, 85.5]

        assert extractValues(items) == [75.0, 80.0, 85.5]


# ================================================================================
# Trend Detection
# ================================================================================

class TestTrendDetector:
    """Tests for sustained drift detection."""

    def test_detectTrend_risingByThree_returnsTrue(self):
        """
        Given: 70, 73, 76, 79, 82
        When: detectTrend() is called
        Then: Returns True
        """
        assert detectTrend([70, 73, 76, 79, 82]) is True

    def test_detectTrend_flat_returnsFalse(self):
        """
        Given: Five readings of 75
        When: detectTrend() is called
        Then: Returns False
        """
        assert detectTrend([75] * 5) is False

    def test_detectTrend_fourReadings_returnsFalse(self):
        """
        Given: Only four readings
        When: detectTrend() is called
        Then: Returns False
        """
        assert detectTrend([70, 73, 76, 79]) is False

    def test_detectTrend_falling_returnsTrue(self):
        """
        Given: 90, 87, 84, 81, 78
        When: detectTrend() is called
        Then: Returns True (absolute delta)
        """
        assert detectTrend([90, 87, 84, 81, 78]) is True

    def test_detectTrend_deltaExactlyThreshold_returnsFalse(self):
        """
        Given: Mean delta exactly 2.0
        When: detectTrend() is called
        Then: Returns False (strictly greater required)
        """
        assert detectTrend([70, 72, 74, 76, 78]) is False

    def test_detect_longHistory_usesLastFive(self):
        """
        Given: Rising readings followed by five flat readings
        When: detect() is called
        Then: Returns False; only the window matters
        """
        history = [70, 73, 76, 79, 82, 82, 82, 82, 82, 82]

        assert TrendDetector().detect(history) is False
        assert TrendDetector().detect([75] * 10 + [70, 73, 76, 79, 82]) is True

    def test_detect_readings_acceptsReadingObjects(self):
        """
        Given: Reading objects
        When: detect() is called
        Then: Values are extracted
        """
        readings = [Reading(1, VitalKind.HEART_RATE, v) for v in (70, 73, 76, 79, 82)]

        assert TrendDetector().detect(readings) is True

    def test_init_windowOfOne_raisesValueError(self):
        """
        Given: Window size 1
        When: TrendDetector is created
        Then: ValueError is raised
        """
        with pytest.raises(ValueError):
            TrendDetector(windowSize=1)


# ================================================================================
# False-Alarm Filter
# ================================================================================

class TestFalseAlarmFilter:
    """Tests for z-score suppression."""

    def test_isLikelyFalseAlarm_stableWindowMedium_returnsTrue(self):
        """
        Given: Stable window ending at 75 and a MEDIUM candidate
        When: isLikelyFalseAlarm() is called
        Then: Returns True (z is about 0.14)
        """
        assert isLikelyFalseAlarm(RiskLevel.MEDIUM, STABLE_WINDOW) is True

    def test_isLikelyFalseAlarm_spikeCritical_returnsFalse(self):
        """
        Given: Window ending in a large spike and a CRITICAL candidate
        When: isLikelyFalseAlarm() is called
        Then: Returns False (z is about 3.0)
        """
        assert isLikelyFalseAlarm(RiskLevel.CRITICAL, SPIKE_WINDOW) is False

    def test_isLikelyFalseAlarm_fourReadings_returnsFalse(self):
        """
        Given: Fewer than five readings
        When: isLikelyFalseAlarm() is called
        Then: Returns False
        """
        assert isLikelyFalseAlarm(RiskLevel.MEDIUM, [75, 76, 74, 75]) is False

    def test_isLikelyFalseAlarm_zeroVariance_returnsFalse(self):
        """
        Given: Ten identical readings
        When: isLikelyFalseAlarm() is called
        Then: Returns False
        """
        assert isLikelyFalseAlarm(RiskLevel.HIGH, [200] * 10) is False

    @pytest.mark.parametrize("value", [39.3, 39.7, 0.1, 91.1, 38.7])
    def test_isLikelyFalseAlarm_constantInexactValue_returnsFalse(self, value):
        """
        Given: Ten identical readings whose mean is not exactly representable
        When: isLikelyFalseAlarm() is called at HIGH
        Then: Returns False (zero variance, never suppressed)
        """
        assert isLikelyFalseAlarm(RiskLevel.HIGH, [value] * 10) is False
        assert FalseAlarmFilter().evaluate(RiskLevel.HIGH, [value] * 10).reason == 'zero_variance'

    def test_evaluate_spike_reportsOutlier(self):
        """
        Given: Spike window
        When: evaluate() is called
        Then: Decision carries reason, score and threshold
        """
        decision = FalseAlarmFilter().evaluate(RiskLevel.HIGH, SPIKE_WINDOW)

        assert decision.suppress is False
        assert decision.reason == 'outlier'
        assert decision.zScore == pytest.approx(2.997, abs=0.01)
        assert decision.threshold == 1.5
        assert decision.sampleCount == 10

    def test_evaluate_criticalThreshold_isLooser(self):
        """
        Given: A window whose latest reading has z of about 1.67
        When: evaluated as CRITICAL and as HIGH
        Then: CRITICAL is suppressed (below 2.5), HIGH is not (at least 1.5)
        """
        # mean 75.5, population std ~5.68, latest 85
        window = [70, 70, 70, 70, 80, 80, 80, 80, 70, 85]
        windowFilter = FalseAlarmFilter()

        decisionCritical = windowFilter.evaluate(RiskLevel.CRITICAL, window)
        decisionHigh = windowFilter.evaluate(RiskLevel.HIGH, window)

        assert decisionCritical.zScore == pytest.approx(decisionHigh.zScore)
        assert 1.5 <= decisionHigh.zScore < 2.5
        assert decisionCritical.suppress is True
        assert decisionHigh.suppress is False

    def test_evaluate_insufficientData_reportsReason(self):
        """
        Given: Three readings
        When: evaluate() is called
        Then: reason is insufficient_data and no score is computed
        """
        decision = FalseAlarmFilter().evaluate(RiskLevel.MEDIUM, [75, 76, 77])

        assert decision.reason == 'insufficient_data'
        assert decision.zScore is None
        assert decision.toDict()['sampleCount'] == 3

    def test_getThreshold_levels_matchDefaults(self):
        """
        Given: Default filter
        When: getThreshold() is called per level
        Then: 2.5 for CRITICAL, 1.5 otherwise
        """
        windowFilter = FalseAlarmFilter()

        assert windowFilter.getThreshold(RiskLevel.CRITICAL) == 2.5
        assert windowFilter.getThreshold(RiskLevel.HIGH) == 1.5
        assert windowFilter.getThreshold(RiskLevel.MEDIUM) == 1.5
