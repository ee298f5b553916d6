"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use WIKIMARK_ prefix (e.g., WIKIMARK_HIGHLIGHT_CODE=true).

Settings can also be loaded from a .env file in the project root.

Note that the rule tables are built once at import time, so settings that
feed into them (link_style) must be in the environment before wikimark is
imported.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use WIKIMARK_ prefix.

    Examples:
        WIKIMARK_LINK_STYLE="color:red;"
        WIKIMARK_HIGHLIGHT_CODE=true
        WIKIMARK_PYGMENTS_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="WIKIMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Rendering configuration
    link_style: str = Field(
        default="color:#2A5DB0;text-decoration: none;",
        description="Inline style attribute emitted on every generated link",
    )

    highlight_code: bool = Field(
        default=False,
        description="Syntax-highlight fenced blocks that carry a language tag",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style used when highlight_code is enabled",
    )

    # Output configuration
    output_suffix: str = Field(
        default=".html",
        description="File suffix of rendered output written by the CLI",
    )

    def outputName_make(self, source_name: str) -> str:
        """
        Generate the output filename for a rendered source file.

        Args:
            source_name: Name of the raw text file (e.g., "article.md")

        Returns:
            Output filename with the configured suffix

        Example:
            >>> settings = AppSettings()
            >>> settings.outputName_make("article.md")
            'article.html'
        """
        return f"{Path(source_name).stem}{self.output_suffix}"


# Singleton instance - import this in your code
appsettings = AppSettings()
