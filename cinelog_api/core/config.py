# cinelog_api/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "cinelog_service"
    env: str = Field(default="local")
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    mongo_dsn: str = Field(
        default="mongodb://mongo:27017/cinelog?replicaSet=rs0",
        alias="MONGO_DSN"
    )
    mongo_db: str = Field(default="cinelog", alias="MONGO_DB")
    # multi-document transactions need a replica set
    mongo_transactions: bool = Field(default=True,
                                     alias="MONGO_TRANSACTIONS")
    mongo_txn_retries: int = Field(default=3, ge=1,
                                   alias="MONGO_TXN_RETRIES")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    sentry_traces_sample_rate: float = Field(
        default=1.0, alias="SENTRY_TRACES_SAMPLE_RATE")

    model_config = SettingsConfigDict(env_file="infra/.env",
                                      extra="ignore",
                                      populate_by_name=True)


settings = Settings()
