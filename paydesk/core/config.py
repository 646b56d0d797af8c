import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()

class PayrollSettings(BaseModel):
    # Semi-monthly cycle; statutory contributions withheld on the second cut-off
    working_days_per_month: int = Field(default=int(os.getenv("PAYROLL_WORKING_DAYS", "22")))
    hours_per_day: int = Field(default=int(os.getenv("PAYROLL_HOURS_PER_DAY", "8")))
    periods_per_year: int = Field(default=int(os.getenv("PAYROLL_PERIODS_PER_YEAR", "24")))
    cutoff_day: int = Field(default=int(os.getenv("PAYROLL_CUTOFF_DAY", "25")))
    deduct_unwithheld_contributions_from_tax_base: bool = Field(
        default=os.getenv("PAYROLL_TAX_BASE_ALWAYS_NET", "false").lower() == "true"
    )
    currency: str = "PHP"

class Config(BaseModel):
    app_name: str = "Paydesk Payroll Service"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./paydesk.db")
    seed_demo_data: bool = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"

    # Payroll policy defaults
    payroll: PayrollSettings = PayrollSettings()

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins from env
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

settings = Config()

# --- Startup Validation ---
_logger = logging.getLogger(__name__)
if not 1 <= settings.payroll.cutoff_day <= 31:
    raise RuntimeError(
        f"FATAL: PAYROLL_CUTOFF_DAY must be a day of the month, got {settings.payroll.cutoff_day}."
    )
if settings.environment != "development" and settings.database_url.startswith("sqlite:///./"):
    _logger.warning("Using a local SQLite file outside development.")
