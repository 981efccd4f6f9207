import os
from datetime import timedelta


def engine_options(uri: str, timeout: float) -> dict:
    """
    Maps the store timeout onto engine options.
    - sqlite: driver busy timeout
    - other databases: pool checkout timeout + pre ping
    - postgresql: server side statement_timeout as well
    """
    if uri.startswith("sqlite"):
        return {"connect_args": {"timeout": timeout}}
    options = {"pool_pre_ping": True, "pool_timeout": timeout}
    if uri.startswith("postgresql"):
        options["connect_args"] = {"options": f"-c statement_timeout={int(timeout * 1000)}"}
    return options


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv(
        "SQLALCHEMY_DATABASE_URI",
        "sqlite:///library_catalog.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # store calls are bounded by this, expiry -> Unavailable (500)
    STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "5"))

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "jwt-super-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_EXPIRES_HOURS", "24")))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
