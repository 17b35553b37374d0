# runtime settings, overridable through environment variables
import os

STORE_NAME = "Skardu Organic"
CURRENCY = "Rs"

DEBUG = bool(os.getenv("DEBUG"))
LOG_FILE = os.getenv("STOREFRONT_LOG_FILE", "")

DB_PATH = os.getenv("STOREFRONT_DB_PATH", "data/storefront.sqlite")

# where orders and inquiries are sent
STORE_PHONE = os.getenv("STOREFRONT_STORE_PHONE", "923488875456")
STORE_EMAIL = os.getenv("STOREFRONT_STORE_EMAIL", "support@skarduorganic.com")
