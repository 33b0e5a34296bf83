"""Environment-driven settings for iri.

Priority chain (highest to lowest):
  1. Init kwargs: passed by the embedding application
  2. Env vars: ``IRI_*`` prefix
  3. Code defaults
"""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from iri.config.logging import configure_logging


class IriSettings(BaseSettings):
    """Logging switches for applications embedding the library.

    Attributes:
        verbose: Emit DEBUG records from the ``iri`` loggers.
        log_json: Render log records as JSON lines.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "IRI_",
    }

    verbose: bool = False
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only init kwargs and environment variables are consulted."""
        return (init_settings, env_settings)

    def configure_logging(self) -> logging.Logger:
        return configure_logging(verbose=self.verbose, log_json=self.log_json)
