"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use TURBOSTREAM_ prefix (e.g., TURBOSTREAM_VERBOSITY=3).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use TURBOSTREAM_ prefix.

    Examples:
        TURBOSTREAM_STREAM_TAG=turbo-stream
        TURBOSTREAM_CONTENT_TYPE="text/vnd.turbo-stream.html"
        TURBOSTREAM_NEW_RECORD_PREFIX=new
    """

    model_config = SettingsConfigDict(
        env_prefix="TURBOSTREAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Markup configuration
    stream_tag: str = Field(
        default="turbo-stream",
        description="Element name of a stream directive",
    )

    template_tag: str = Field(
        default="template",
        description="Element name wrapping the content of a stream directive",
    )

    indent: int = Field(
        default=4,
        ge=0,
        description="Spaces per nesting level in rendered markup",
    )

    # Response configuration
    content_type: str = Field(
        default="text/html; turbo-stream",
        description="Content-Type header of stream responses",
    )

    # Naming configuration
    new_record_prefix: str = Field(
        default="create",
        description="Prefix of DOM ids for entities that have no primary key yet",
    )

    id_delimiter: str = Field(
        default="_",
        description="Delimiter joining the parts of a DOM id",
    )

    # Logging configuration
    verbosity: int = Field(
        default=1,
        ge=0,
        description="Fallback logging verbosity when no state is connected to the logger",
    )

    def domId_make(self, singular: str, key: object) -> str:
        """
        Generate the DOM id of a persisted entity.

        Args:
            singular: Singular snake_case name of the entity type
            key: Primary key of the entity

        Returns:
            DOM id string (e.g., "comment_42")

        Example:
            >>> settings = AppSettings()
            >>> settings.domId_make('comment', 42)
            'comment_42'
        """
        return f"{singular}{self.id_delimiter}{key}"

    def newRecordId_make(self, singular: str) -> str:
        """
        Generate the DOM id of an entity that has no primary key yet.

        Example:
            >>> settings = AppSettings()
            >>> settings.newRecordId_make('comment')
            'create_comment'
        """
        return f"{self.new_record_prefix}{self.id_delimiter}{singular}"


# Singleton instance - import this in your code
appsettings = AppSettings()
