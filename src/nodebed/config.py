"""Configuration management module"""
import os
from pathlib import Path
from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
    TomlConfigSettingsSource,
)


def get_testbed_path(path: str | Path | None = None) -> Path:
    """Get the testbed root from argument, environment or default

    Args:
        path: Explicit path, takes precedence over ``NODEBED_PATH``

    Returns:
        Absolute testbed path (default: ~/testbed)
    """
    if path is not None:
        return Path(path).expanduser().resolve()
    testbed_path = os.environ.get("NODEBED_PATH")
    if testbed_path:
        return Path(testbed_path).expanduser().resolve()
    return Path.home() / "testbed"


class Settings(BaseSettings):
    """Testbed configuration settings

    Values come from (highest priority first) constructor arguments,
    ``NODEBED_*`` environment variables and ``<testbed>/config.toml``.
    """

    # Same variable get_testbed_path reads, so the TOML location and the
    # resolved path cannot disagree
    testbed_path: Path = Field(
        default_factory=get_testbed_path,
        validation_alias=AliasChoices("testbed_path", "NODEBED_PATH"),
    )

    # Daemon binaries
    ipfs_binary: str = "ipfs"
    filecoin_binary: str = "go-filecoin"
    init_key_bits: int = 1024

    # Shutdown escalation (seconds)
    interrupt_timeout: float = 1.0
    quit_timeout: float = 5.0
    kill_timeout: float | None = None
    poll_interval: float = 0.01

    # Readiness (seconds)
    readiness_settle_delay: float = 0.1
    readiness_attempts: int = 10
    readiness_interval: float = 0.1
    readiness_strict: bool = False

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="NODEBED_",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include the testbed TOML file"""
        init_kwargs = getattr(init_settings, "init_kwargs", {})
        config_file = get_testbed_path(init_kwargs.get("testbed_path")) / "config.toml"
        if config_file.exists():
            toml_settings = TomlConfigSettingsSource(
                settings_cls, toml_file=config_file
            )
            return (
                init_settings,
                env_settings,
                toml_settings,
                file_secret_settings,
            )
        return (
            init_settings,
            env_settings,
            file_secret_settings,
        )


def get_settings(testbed_path: str | Path | None = None) -> Settings:
    """Build settings for a testbed

    Args:
        testbed_path: Testbed root, falls back to ``NODEBED_PATH``

    Returns:
        Settings with ``<testbed>/config.toml`` applied when present
    """
    return Settings(testbed_path=get_testbed_path(testbed_path))
