"""
Centralized constants for snapshots and seed data.

Change snapshot names or seed tables here instead of scattering literals across the store and services.
"""

# Snapshot kinds (one persisted file each)
KIND_DROPS = "drops"
KIND_PRICES = "prices"
KIND_KEYS = "keys"
SNAPSHOT_KINDS = (KIND_DROPS, KIND_PRICES, KIND_KEYS)

SNAPSHOT_FILES = {
    KIND_DROPS: "drops.json",
    KIND_PRICES: "prices.json",
    KIND_KEYS: "api_keys.json",
}

# First-start drop table; weights sum to 100 so they read as percentages
DEFAULT_DROPS = [
    {"id": "cigs", "weight": 30},
    {"id": "weed", "weight": 25},
    {"id": "pills", "weight": 18},
    {"id": "weap", "weight": 10},
    {"id": "chips", "weight": 10},
    {"id": "gold", "weight": 7},
]

# Base prices; GET /prices walks them from here
DEFAULT_PRICES = {
    "cigs": 12.00,
    "weed": 75.00,
    "pills": 45.00,
    "weap": 350.00,
    "chips": 8.00,
    "gold": 1200.00,
}

SERVICE_NAME = "qcr-contraband-backend"

# Upper bound for GET /drops/odds so one request stays cheap
MAX_SIMULATION_TRIALS = 100_000

# Log lines show only this many characters of an API key
KEY_LOG_PREFIX = 8
