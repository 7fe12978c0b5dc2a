"""ShopForm FastAPI application.

Web server for storefront registrations and product reviews. Commands are
processed synchronously inside each request.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# PROTEAN_ENV selects the config overlay from shopform/domain.toml:
#   - unset / "development" → in-memory database
#   - "production"          → PostgreSQL at DATABASE_URL
from shopform.api import create_app
from shopform.domain import shopform

shopform.init()

app = create_app(shopform)
