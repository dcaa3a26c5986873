"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Defaults written into a freshly seeded settings row.
DEFAULT_MAX_CLOCKING_TIME = "11:00 AM"
DEFAULT_AUTO_CLOCK_OUT_TIME = "7:30 PM"
DEFAULT_MAX_LATE_DAYS = 3
DEFAULT_LATE_DEDUCTION_PER_DAY = Decimal("0.5")
DEFAULT_COMPANY_NAME = "Mavericks and Musers Media Pvt. Ltd."

# Compare-and-set attempts before the accumulator gives up on a contended month.
MAX_DEDUCTION_ATTEMPTS = 3
