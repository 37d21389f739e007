from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Oracle: empty URL means "not configured"; the HTTP feed refuses to start
    ORACLE_URL: str = ""
    ORACLE_HEARTBEAT_SECONDS: int = 3600
    ORACLE_TIMEOUT_SECONDS: float = 5.0

    # Settlement: True credits the full paid amount, False only the amount owed.
    # With True, any refund leaves custodied_balance above actual holdings, and a
    # payout of that excess fails with TransactionFailedError. False keeps
    # custodied_balance <= holdings.
    CREDIT_FULL_PAYMENT: bool = True

    # JWT: no default, MUST be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 30

    # Subject id allowed to call privileged catalog/ledger endpoints
    OWNER_ID: str = "owner"

    # App
    APP_NAME: str = "Commerce Ledger"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev


settings = Settings()
