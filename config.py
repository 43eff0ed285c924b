"""
Configuration Management for ICO Server
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application Settings"""

    # Server Configuration
    ico_server_host: str = "0.0.0.0"
    ico_server_port: int = 8002

    # Encoding
    mask_threshold: int = 1
    default_sizes: str = "16,24,32,48,64,128,256"  # Comma-separated

    # Processing
    decode_workers: int = 4
    max_upload_size_mb: int = 10

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def sizes_list(self) -> List[int]:
        """Get list of candidate icon sizes"""
        return parse_sizes(self.default_sizes)


def parse_sizes(value: str) -> List[int]:
    """Parse a comma-separated size list, e.g. '16,32,48'"""
    return [int(s.strip()) for s in value.split(",") if s.strip()]


# Global settings instance
settings = Settings()
