"""
Constants for vaultadmin.

Unit conversion factors shared by the billing views and the admin.
"""

from decimal import Decimal

# =============================================================================
# STORAGE
# =============================================================================

# 1 GB
BYTES_PER_GIGABYTE = 1073741824

STORAGE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")

# =============================================================================
# CURRENCY
# =============================================================================

# Stripe amounts are integer minor units (cents)
MINOR_UNITS_PER_MAJOR = Decimal(100)

CURRENCY_QUANTUM = Decimal("0.01")
