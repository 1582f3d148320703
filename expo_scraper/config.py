from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Playwright
    playwright_headless: bool = True
    playwright_ws_endpoint: str | None = None
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
    )
    navigation_timeout_ms: int = 60_000
    initial_settle_ms: int = 3_000
    ready_timeout_ms: int = 20_000

    # Pagination
    pagination_click_delay_ms: int = 4_000
    pagination_wait_timeout_ms: int = 20_000
    pagination_settle_ms: int = 2_000

    # Website resolution
    google_api_key: str | None = None
    google_search_engine_id: str | None = None
    google_search_url: str = "https://www.googleapis.com/customsearch/v1"
    probe_timeout_s: float = 5.0
    probe_max_redirects: int = 5
    search_timeout_s: float = 10.0
    website_search_delay_ms: int = 300

    # Defaults applied when a request leaves the option out
    find_websites_default: bool = False
    max_website_searches_default: int = 10

    # API
    cors_allowed_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Output
    output_dir: str = "./output"

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
