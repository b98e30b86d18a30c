import tomllib
from functools import cached_property
from pathlib import Path
from typing import ClassVar

from pydantic import computed_field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from shareit.types.exceptions import (
    DotenvInvalidVariableError,
    DotenvMissingVariableError,
)


class Settings(BaseSettings):
    """
    Settings shared by the ShareIt server and gateway.

    All undefined variables will be populated from:
    1. An environment variable
    2. A yaml file
    3. A dotenv file

    See [Pydantic Settings documentation](https://docs.pydantic.dev/latest/concepts/pydantic_settings/#dotenv-env-support) for more information.
    See [FastAPI settings](https://fastapi.tiangolo.com/advanced/settings/) article for best practices with settings.

    To access these settings, the `get_settings` dependency of each tier should be used.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        yaml_file="config.yaml",
        case_sensitive=False,
        extra="ignore",
    )

    # Currently Pydantic does not support overriding the yaml file path using the `_yaml_file` parameter
    # as it does for the `_env_file` parameter.
    # See https://github.com/pydantic/pydantic-settings/issues/259
    # We thus override the `_yaml_file` manually during the class instantiation
    _yaml_file: ClassVar[str]

    def __init__(self, _yaml_file, _env_file, **kwargs):
        type(self)._yaml_file = _yaml_file
        super().__init__(_env_file=_env_file, **kwargs)

    # The order of the sources define their precedence:
    # parameters passed as initialization arguments will have
    # precedence over environment variables, yaml file and dotenv
    # See https://docs.pydantic.dev/latest/concepts/pydantic_settings/#important-notes
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_file),
            dotenv_settings,
        )

    ####################
    # Logging settings #
    ####################

    # By default, only production's records are logged
    LOG_DEBUG_MESSAGES: bool = False

    # Origins for the CORS middleware. `["http://localhost"]` can be used for development.
    # See https://fastapi.tiangolo.com/tutorial/cors/
    # It should begin with 'http://' or 'https:// and should never end with a '/'
    CORS_ORIGINS: list[str] = []

    #############################
    # pyproject.toml parameters #
    #############################

    @computed_field  # type: ignore[prop-decorator]
    @cached_property
    def SHAREIT_VERSION(cls) -> str:
        with Path("pyproject.toml").open("rb") as pyproject_binary:
            pyproject = tomllib.load(pyproject_binary)
        return str(pyproject["project"]["version"])

    @model_validator(mode="after")
    def init_cached_property(self) -> "Settings":
        """
        Cached property are not computed during the instantiation of the class, but when they are accessed for the first time.
        By calling them in this validator, we force their initialization during the instantiation of the class.
        """
        self.SHAREIT_VERSION  # noqa: B018

        return self


class ServerSettings(Settings):
    """
    Settings of the ShareIt server, the tier owning the database.
    """

    ############################
    # Database configuration   #
    ############################
    # If set, the server use a SQLite database instead of PostgreSQL, for testing or development purposes
    SQLITE_DB: str | None = None
    POSTGRES_HOST: str = ""
    POSTGRES_USER: str = ""
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = ""
    DATABASE_DEBUG: bool = False  # If True, the database will log all queries

    @computed_field  # type: ignore[prop-decorator]
    @cached_property
    def SQLALCHEMY_DATABASE_URL(cls) -> str:
        if cls.SQLITE_DB:
            return f"sqlite+aiosqlite:///./{cls.SQLITE_DB}"
        return f"postgresql+asyncpg://{cls.POSTGRES_USER}:{cls.POSTGRES_PASSWORD}@{cls.POSTGRES_HOST}/{cls.POSTGRES_DB}"

    @model_validator(mode="after")
    def check_database_settings(self) -> "ServerSettings":
        """
        All fields are optional, but the dotenv should configure SQLITE_DB or a Postgres database
        """
        if not (
            self.SQLITE_DB
            or (
                self.POSTGRES_HOST
                and self.POSTGRES_USER
                and self.POSTGRES_PASSWORD
                and self.POSTGRES_DB
            )
        ):
            raise DotenvMissingVariableError(
                "Either SQLITE_DB or POSTGRES_HOST, POSTGRES_USER, POSTGRES_PASSWORD and POSTGRES_DB",
            )

        return self


class GatewaySettings(Settings):
    """
    Settings of the ShareIt gateway, the tier validating requests before forwarding them to the server.
    """

    # Base url of the ShareIt server, like `http://localhost:9090`
    # NOTE: it should not end with a '/'
    SHAREIT_SERVER_URL: str
    # Timeout in seconds for requests forwarded to the server
    SHAREIT_SERVER_TIMEOUT: float = 10

    @model_validator(mode="after")
    def check_server_url(self) -> "GatewaySettings":
        if self.SHAREIT_SERVER_URL.endswith("/"):
            raise DotenvInvalidVariableError(  # noqa: TRY003
                "SHAREIT_SERVER_URL must not end with a trailing slash",
            )
        return self


def construct_prod_settings() -> ServerSettings:
    """
    Return the production settings of the server
    """
    return ServerSettings(_env_file=".env", _yaml_file="config.yaml")


def construct_prod_gateway_settings() -> GatewaySettings:
    """
    Return the production settings of the gateway
    """
    return GatewaySettings(_env_file=".env.gateway", _yaml_file="config.gateway.yaml")
