from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BACKEND = "http://localhost:3000"
DEFAULT_EDIT_PATH = "/api/image"
DEFAULT_TIMEOUT = 120.0


class EditorSettings(BaseSettings):
    """Connection settings for the image edit service.

    ``backend`` can be overridden with ``BACKEND`` or ``PHOTOEDIT_BACKEND``;
    the other fields use the ``PHOTOEDIT_`` prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="PHOTOEDIT_", env_file=".env", extra="ignore", populate_by_name=True
    )

    backend: str = Field(
        default=DEFAULT_BACKEND,
        validation_alias=AliasChoices("BACKEND", "PHOTOEDIT_BACKEND"),
    )
    edit_path: str = DEFAULT_EDIT_PATH
    request_timeout: float = DEFAULT_TIMEOUT
