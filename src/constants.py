"""Centralized constants for the simulation engine.

This module contains system-wide constants used across the codebase to ensure
consistency and avoid duplication. Tunable values live in
``scenarios.base.SimulationConfig``; what stays here is fixed by the model.
"""

# Floating point comparison tolerance
# Used for validating cash and share conservation in the verifier
FLOAT_TOLERANCE = 1e-5

# Prices are floored here after every tick and every daily impact
MIN_PRICE = 0.01

SECONDS_PER_DAY = 86400
HOURS_PER_DAY = 24.0

# Length of one regional trading session, used to pro-rate per-tick activity
TRADING_SESSION_HOURS = 6.5

# Horizon (in days) after which an agent trade is scored for learning
TRADE_EVALUATION_HORIZON = 5

# Horizon (in days) after which a generated article is scored
ARTICLE_EVALUATION_HORIZON = 10

# Outcome horizons for corporate actions
CORPORATE_EVALUATION_HORIZONS = {
    'split': 60,
    'alliance': 90,
    'acquisition': 180,
}

MAX_EVENT_HISTORY = 100
MAX_PORTFOLIO_HISTORY = 200

# Event types that carry a mildly positive sentiment signal
STRUCTURAL_EVENT_TYPES = ('split', 'merger', 'alliance')

GLOBAL_REGION = 'Global'
