from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_URL: str = "sqlite+aiosqlite:///./storefront.db"
    DB_ECHO: bool = False
    DB_QUERY_TIMEOUT: float = 10.0

    LOG_LEVEL: str = "INFO"
    DEFAULT_LANGUAGE: str = "mk"

    # public object storage, e.g. https://<project>.supabase.co
    STORAGE_URL: str = ""
    STORAGE_BUCKET: str = "product-images"

    DEFAULT_PAGE_SIZE: int = 12
    MAX_PAGE_SIZE: int = 48
    HOMEPAGE_PRODUCT_POOL_LIMIT: int = 500

    class Config:
        env_file = ".env"

settings = Settings()
