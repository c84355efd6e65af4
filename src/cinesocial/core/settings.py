"""Application settings and configuration.

This module defines the configuration options for the CineSocial store and the
application that hosts it. Settings are loaded from environment variables with
sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a `.env` file.
    """

    # Application metadata
    app_name: str = Field(default="CineSocial", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Stories disappear from view after this many hours
    story_ttl_hours: int = Field(default=24, ge=1, alias="STORY_TTL_HOURS")

    # Defaults applied when the caller omits optional fields
    default_user_role: str = Field(default="user", alias="DEFAULT_USER_ROLE")
    default_user_permissions: list[str] = Field(
        default=["view_content"],
        alias="DEFAULT_USER_PERMISSIONS",
    )
    default_post_visibility: str = Field(default="public", alias="DEFAULT_POST_VISIBILITY")
    default_community_type: str = Field(default="public", alias="DEFAULT_COMMUNITY_TYPE")

    # When enabled a new reaction replaces the user's previous reaction on a post
    exclusive_reactions: bool = Field(default=False, alias="EXCLUSIVE_REACTIONS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def story_ttl_seconds(self) -> int:
        """Return the story lifetime in seconds."""
        return self.story_ttl_hours * 60 * 60


settings = Settings()
