"""Default configuration constants for the Studio Space Planner."""

# Logging level applied once by the Streamlit entry point
LOG_LEVEL = "INFO"

# Seeded room shuffle (linear congruential generator)
DEFAULT_SEED = 17
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32

# Floors may borrow this fraction above their base capacity
DEFAULT_FLOOR_BUFFER_RATIO = 0.15
MIN_FLOOR_BUFFER_RATIO = 0.0
MAX_FLOOR_BUFFER_RATIO = 0.50

# Composite floor key: building + separator + floor label
FLOOR_ID_SEPARATOR = "__"

# Studio id format: S-001, S-002, ...
STUDIO_ID_PREFIX = "S-"
STUDIO_ID_WIDTH = 3

# Placement strategies, in the order they are attempted
PLACEMENT_STRATEGIES = ["strict", "next", "dynamic"]

# Allocation form defaults and bounds
DEFAULT_PROGRAM_COUNT = 2
MIN_PROGRAM_COUNT = 1
MAX_PROGRAM_COUNT = 12
DEFAULT_PROGRAM_SIZE = 60
NEW_PROGRAM_SIZE = 50
DEFAULT_STUDIO_CAP = 20
MIN_STUDIO_CAP = 2
DEFAULT_ALLOW_MIXING = True
DEFAULT_SEMESTERS_PER_YEAR = 2
MIN_SEMESTERS_PER_YEAR = 1
MAX_SEMESTERS_PER_YEAR = 4
DEFAULT_TA_COMPENSATION = 6636  # per semester
DEFAULT_STAFF_COUNTS = {"faculty": 1, "ta_fa": 6, "grader": 2}

# Finance surcharges (fractions of compensation)
RISK_RATE = 0.011
TECH_FEE_RATE = 0.025
ADMIN_SERVICE_RATE = 0.085  # applied to the subtotal

# Compensation matrix. compensation=None means "use the TA/FA input x semesters".
COMPENSATION_MATRIX = [
    {"key": "faculty", "role": "Faculty", "compensation": 85000, "ere_rate": 0.306},
    {"key": "ta_fa", "role": "FA / TA", "compensation": None, "ere_rate": 0.11},
    {"key": "grader", "role": "Grader", "compensation": 18000, "ere_rate": 0.019},
]

# Space division CSV columns
SPACE_COLUMN_BUILDING = "BUILDING"
SPACE_COLUMN_LEVEL = "LEVEL"
SPACE_COLUMN_STUDIO = "STUDIO"
SPACE_COLUMN_ROOM = "ROOM"
SPACE_COLUMN_OCCUPANCY = "ASTRA OCCUPANCY"

# Combined spaces CSV columns
COMBINED_COLUMN_ID = "combined_id"
COMBINED_COLUMN_MEMBERS = "members"
COMBINED_COLUMN_CAPACITY_OVERRIDE = "capacity_override"
COMBINED_COLUMN_MODE = "mode"

# Export
EXPORT_FILENAME = "allocation-export.csv"
UNASSIGNED_SECTION_TITLE = "Unassigned Studios"
