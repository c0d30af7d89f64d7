from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    rent_noise_threshold_sol: Decimal = Decimal("0.01")  # positive SOL rows below this are rent refunds
    minimum_usd_value: Decimal = Decimal("2.0")
    suppress_core_to_core: bool = True
    slow_parse_warning_ms: float = 100.0
    batch_max_workers: int = 8
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "SWAPCLASSIFIER_"


settings = Settings()
