"""Shared planner constants."""

# Driver loop ceiling: 100 years of monthly rounds.
DEFAULT_MAX_MONTHS = 1200

STRATEGY_NAMES = ("avalanche", "snowball", "custom")

# Insight thresholds
HIGH_INTEREST_RATE = 15
FREEDOM_WITHIN_MONTHS = 60
LARGE_EXTRA_PAYMENT = 100

# Consolidation loan defaults
CONSOLIDATION_TERM_MONTHS = 36
CONSOLIDATION_MIN_SAVINGS = 1000
