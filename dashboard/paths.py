# dashboard/paths.py
"""Route paths shared by the page handlers and the write actions."""

OVERVIEW_PATH = "/dashboard"
INVOICES_PATH = "/dashboard/invoices"
CUSTOMERS_PATH = "/dashboard/customers"

# Every page whose cached data is built from invoice or customer rows.
DATA_PATHS = (OVERVIEW_PATH, INVOICES_PATH, CUSTOMERS_PATH)
