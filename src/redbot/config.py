"""
Account and application credentials.

The ``username`` and ``password`` fields are the login strings of the bot
account. ``user_agent`` is sent on every request, as the API usage rules
require. ``client_id`` and ``client_secret`` belong to a 'script' type
application registered at https://www.reddit.com/prefs/apps/.

A config file is a JSON object with exactly these five string keys::

    {
      "username": "my-bot-account",
      "password": "hunter2",
      "user_agent": "linux:redbot:v0.1.0 (bot by /u/my-main-account)",
      "client_id": "foo",
      "client_secret": "bar"
    }
"""

import os
from pathlib import Path
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from redbot.exceptions import ApiError
from redbot.utils.logger import get_logger

logger = get_logger(__name__)

# Environment variable for each Config field
ENV_VARS: Dict[str, str] = {
    "username": "REDDIT_USERNAME",
    "password": "REDDIT_PASSWORD",
    "user_agent": "REDDIT_USER_AGENT",
    "client_id": "REDDIT_CLIENT_ID",
    "client_secret": "REDDIT_CLIENT_SECRET",
}


class Config(BaseModel):
    """
    Credentials needed to obtain a password-grant access token.

    Immutable once loaded. All fields are required strings; numbers or
    nulls in a config file are rejected rather than coerced.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Account password", repr=False)
    user_agent: str = Field(..., description="User-Agent header value")
    client_id: str = Field(..., description="App client id")
    client_secret: str = Field(..., description="App client secret", repr=False)

    @classmethod
    def load_config(cls, path: Union[str, Path]) -> "Config":
        """
        Load the configuration from a JSON file.

        Args:
            path: Path to the config file

        Returns:
            Config parsed from the file

        Raises:
            ApiError: tagged ``io`` if the file cannot be read, or ``decode``
                if its content is not a valid config object

        Example:
            >>> config = Config.load_config("config.json")
        """
        try:
            contents = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            logger.error("config_read_failed", path=str(path), error=str(e))
            raise ApiError.from_io(e) from None

        config = cls.loads(contents)
        logger.debug("config_loaded", path=str(path), username=config.username)
        return config

    @classmethod
    def loads(cls, contents: Union[str, bytes]) -> "Config":
        """
        Decode a config from its JSON text.

        Raises:
            ApiError: tagged ``decode`` on malformed JSON or bad fields
        """
        try:
            return cls.model_validate_json(contents)
        except ValidationError as e:
            raise ApiError.from_decode(e) from None

    def dumps(self) -> str:
        """Encode the config as the JSON text accepted by ``loads``."""
        return self.model_dump_json()

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load credentials from environment variables.

        Expected variables:
        - REDDIT_USERNAME
        - REDDIT_PASSWORD
        - REDDIT_USER_AGENT
        - REDDIT_CLIENT_ID
        - REDDIT_CLIENT_SECRET

        Raises:
            ApiError: if any variable is unset or empty
        """
        values = {}
        for field_name, env_var in ENV_VARS.items():
            value = os.getenv(env_var)
            if not value:
                logger.error("config_env_missing", variable=env_var)
                raise ApiError(f"{env_var} environment variable is required")
            values[field_name] = value

        return cls(**values)
