"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_DRAFT_TTL_HOURS = 72

# Id prefixes: <PREFIX>-<6-digit time suffix>-<3-digit random>
SCHEDULE_ID_PREFIX = "SCH"
ITEM_ID_PREFIX = "ITEM"
WORK_ENTRY_ID_PREFIX = "WORK"
EMPLOYEE_ID_PREFIX = "EMP"

# Keyed by task name; absent tasks pay 0.
DEFAULT_PAY_RATES = {
    "Stripping": 0.1,
    "Ticket-Based Work": 5.0,
    "Bailing Sticks": 0.2,
    "Bailing Lamina": 0.15,
    "Machine": 0.12,
}

PAY_RATES_FILENAME = "pay_rates.json"
DRAFTS_FILENAME = "drafts.json"
