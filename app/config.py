# app/config.py
import os

# Externally reachable HTTPS address of the service
BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")

# Product feed the storefront reads its catalog from
CATALOG_URL = os.getenv("CATALOG_URL", "https://fakestoreapi.com/products")

# Seconds before a catalog request is abandoned
CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", "10"))

CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "$")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
