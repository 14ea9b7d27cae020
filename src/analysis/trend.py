################################################################################
# File Name: trend.py
# Purpose/Description: Sustained drift detection over a reading window
# Author: Michael Cornelison
# Creation Date: 2026-10-12
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-12    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################
"""
Sustained drift detection over a reading window.

The detector looks at the last five readings, averages the four successive
deltas and flags the series when the absolute average exceeds 2.0 native
units. It is independent of risk classification and can fire while the
latest reading is itself LOW risk.
"""

import logging
from typing import Any, Sequence

from .calculations import calculateMeanDelta, extractValues

logger = logging.getLogger(__name__)

# Readings examined (gives windowSize - 1 deltas)
DEFAULT_TREND_WINDOW = 5

# Absolute mean delta that counts as a concerning trend
DEFAULT_TREND_DELTA_THRESHOLD = 2.0


class TrendDetector:
    """
    Drift detector.

    Example:
        detector = TrendDetector()
        detector.detect([70, 73, 76, 79, 82])  # True
    """

    def __init__(
        self,
        windowSize: int = DEFAULT_TREND_WINDOW,
        deltaThreshold: float = DEFAULT_TREND_DELTA_THRESHOLD
    ):
        """
        Initialize the detector.

        Args:
            windowSize: Number of most recent readings examined (minimum 2)
            deltaThreshold: Absolute mean delta above which a trend is flagged
        """
        if windowSize < 2:
            raise ValueError(f"Trend window must hold at least 2 readings, got {windowSize}")
        self.windowSize = windowSize
        self.deltaThreshold = deltaThreshold

    def detect(self, history: Sequence[Any]) -> bool:
        """
        Check a history for sustained drift.

        Args:
            history: Readings (or values), oldest first

        Returns:
            True if the mean delta over the window exceeds the threshold;
            False when the history is shorter than the window
        """
        if len(history) < self.windowSize:
            return False

        values = extractValues(history[-self.windowSize:])
        meanDelta = calculateMeanDelta(values)
        flagged = abs(meanDelta) > self.deltaThreshold

        if flagged:
            logger.debug(
                f"Trend detected: meanDelta={meanDelta:.2f}, "
                f"threshold={self.deltaThreshold}"
            )
        return flagged


_defaultDetector = TrendDetector()


def detectTrend(history: Sequence[Any]) -> bool:
    """
    Check a history for sustained drift using the default parameters.

    Args:
        history: Readings (or values), oldest first

    Returns:
        True if a concerning trend is present
    """
    return _defaultDetector.detect(history)
