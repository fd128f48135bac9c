"""Runtime configuration, read from `SHOPCART_*` environment variables.

Adapter settings name the implementation to wire for each collaborator.
Only the in-memory adapters ship with this package; a storefront plugging
in its own backends builds the cart with explicit collaborators instead.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class CartSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHOPCART_", env_file=".env", extra="ignore")

    environment: str = "development"
    currency: str = "USD"
    log_level: str | None = None
    log_dir: str | None = None

    catalogue_adapter: str = "memory"
    pricing_adapter: str = "memory"
    tax_adapter: str = "memory"
    shipping_adapter: str = "memory"
    repository_adapter: str = "memory"
    contacts_adapter: str = "memory"
    activity_adapter: str = "memory"


@lru_cache
def get_settings() -> CartSettings:
    """Return the process-wide settings, loading them on first use."""
    return CartSettings()


def reset_settings() -> None:
    """Drop cached settings so the next call re-reads the environment (useful for tests)."""
    get_settings.cache_clear()
