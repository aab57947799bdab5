"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    source_dir: Path = Path(".")
    posts_dir: Path = Path("_posts")
    git_executable: str = "git"
    site_title: str = "lastmod"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="LASTMOD_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def posts_path(self) -> Path:
        """Directory holding the posts, resolved against the site root."""
        return self.source_dir / self.posts_dir


settings = Settings()
