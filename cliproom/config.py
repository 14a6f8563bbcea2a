"""ClipRoom Server Configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"
DEFAULT_ENCRYPTION_KEY = "your-encryption-key-change-in-production"


class Settings(BaseSettings):
    # Server
    app_name: str = "ClipRoom"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    environment: str = "development"  # 'development' | 'production'
    log_level: str = "INFO"
    cors_origins: list[str] = []

    # Paths
    data_dir: Path = Path.home() / "cliproom" / "data"
    upload_dir: Path = Path.home() / "cliproom" / "uploads"

    # Database
    db_path: Path = Path.home() / "cliproom" / "data" / "cliproom.db"

    # Session (JWT in cookie)
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    session_expire_days: int = 7
    session_cookie_name: str = "session"

    # Credentials
    bcrypt_rounds: int = 12
    api_key_bytes: int = 32

    # Content encryption
    encryption_key: str = DEFAULT_ENCRYPTION_KEY

    # Rooms
    room_code_length: int = 6
    room_code_max_attempts: int = 10

    # Uploads
    max_upload_bytes: int = 50 * 1024 * 1024

    model_config = {"env_prefix": "CLIPROOM_"}

    @property
    def cookie_secure(self) -> bool:
        return self.environment == "production"

    @property
    def session_max_age(self) -> int:
        return self.session_expire_days * 24 * 60 * 60

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        for d in [self.data_dir, self.upload_dir, self.db_path.parent]:
            d.mkdir(parents=True, exist_ok=True)

    def insecure_defaults(self) -> list[str]:
        """Names of secrets still set to their shipped placeholder values."""
        names = []
        if self.jwt_secret == DEFAULT_JWT_SECRET:
            names.append("CLIPROOM_JWT_SECRET")
        if self.encryption_key == DEFAULT_ENCRYPTION_KEY:
            names.append("CLIPROOM_ENCRYPTION_KEY")
        return names


settings = Settings()
settings.ensure_dirs()
