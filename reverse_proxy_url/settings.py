import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file variables into environment
load_dotenv(verbose=True)


class Settings:
    """Application configuration settings loaded from environment variables."""

    # --- App Settings ---
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    APP_RELOAD: bool = False

    # --- Rewrite Settings ---
    REWRITE_ERROR_STATUS_CODE: Optional[int] = None

    # --- App Getters using os.getenv ---
    def get_app_host(self) -> str:
        return os.getenv("APP_HOST", "0.0.0.0")  # nosec B104

    def get_app_port(self) -> int:
        """Returns the port to serve on as an integer."""
        port_str = os.getenv("APP_PORT", "8000")
        try:
            return int(port_str)
        except ValueError:
            raise ValueError("APP_PORT environment variable must be an integer.")

    def get_app_reload(self) -> bool:
        return os.getenv("APP_RELOAD", "false").lower() == "true"

    # --- Rewrite Getters ---
    def get_rewrite_error_status_code(self) -> int | None:
        """Returns the status code sent for rejected requests, or None to use each error's own status."""
        code_str = os.getenv("REWRITE_ERROR_STATUS_CODE")
        if not code_str:
            return None
        try:
            code = int(code_str)
        except ValueError:
            raise ValueError("REWRITE_ERROR_STATUS_CODE environment variable must be an integer.")
        if not 400 <= code <= 599:
            raise ValueError("REWRITE_ERROR_STATUS_CODE must be an error status between 400 and 599.")
        return code

    # --- Logging Settings ---
    def get_log_level(self, default: str = "INFO") -> str:
        """Gets the configured log level, defaulting if not set."""
        return os.getenv("LOG_LEVEL", default).upper()

    def get_run_mode(self) -> str:
        """Returns the run mode, defaulting to 'prod' if not set."""
        return os.getenv("RUN_MODE", "prod")

    def dev_mode(self) -> bool:
        """Returns True if the run mode is 'dev', False otherwise."""
        return self.get_run_mode() == "dev"
