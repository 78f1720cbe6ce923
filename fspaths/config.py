import configparser
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class CacheConfig:
    freshness_ms: int = 50

    @property
    def freshness_seconds(self) -> float:
        return self.freshness_ms / 1000


@dataclass
class ModeConfig:
    dir_mode: int = 0o755
    file_mode: int = 0o644


@dataclass
class LogConfig:
    level: str = "WARNING"
    file: str = ""
    console: bool = True


@dataclass
class AppConfig:
    cache: CacheConfig = field(default_factory=CacheConfig)
    modes: ModeConfig = field(default_factory=ModeConfig)
    logging: LogConfig = field(default_factory=LogConfig)


def _parse_mode(name: str, value: str) -> int:
    try:
        mode = int(value, 8)
    except ValueError:
        raise ValueError(f"Invalid {name} value in config: '{value}' - must be an octal mode")
    if not 0 <= mode <= 0o7777:
        raise ValueError(f"Invalid {name} value in config: '{value}' - out of range")
    return mode


def load_config(config_path: str | None = None, **cli_args) -> AppConfig:
    """
    Load configuration from an INI file and/or CLI arguments.
    CLI arguments take precedence over config file.

    Args:
        config_path: Path to the INI configuration file.
        **cli_args: Key-value pairs from command line arguments
            (freshness_ms, debug).

    Returns:
        AppConfig: The populated configuration object.

    Raises:
        FileNotFoundError: If config_path is provided but does not exist.
        ValueError: If a value cannot be parsed.
    """
    cache_config = {"freshness_ms": 50}
    mode_config = {"dir_mode": 0o755, "file_mode": 0o644}
    log_config = {"level": "WARNING", "file": "", "console": True}

    if config_path is not None:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        parser = configparser.ConfigParser()
        parser.read(config_file, encoding="utf-8")

        # Load [cache] section
        if parser.has_section("cache"):
            cache_section = parser["cache"]
            if cache_section.get("freshness_ms"):
                try:
                    cache_config["freshness_ms"] = int(cache_section.get("freshness_ms"))
                except ValueError:
                    raise ValueError(
                        f"Invalid freshness_ms value in config: '{cache_section.get('freshness_ms')}' - must be an integer"
                    )

        # Load [modes] section
        if parser.has_section("modes"):
            modes_section = parser["modes"]
            for key in ("dir_mode", "file_mode"):
                if modes_section.get(key):
                    mode_config[key] = _parse_mode(key, modes_section.get(key))

        # Load [logging] section
        if parser.has_section("logging"):
            log_section = parser["logging"]
            if log_section.get("level"):
                log_config["level"] = log_section.get("level").upper()
            if "file" in log_section:
                log_config["file"] = log_section.get("file", "")
            if log_section.get("console"):
                log_config["console"] = log_section.get("console", "true").lower() in (
                    "true",
                    "1",
                    "yes",
                )

    # Override with CLI arguments (cli_args take precedence)
    if cli_args.get("freshness_ms") is not None:
        cache_config["freshness_ms"] = int(cli_args["freshness_ms"])
    if cli_args.get("debug"):
        log_config["level"] = "DEBUG"
        log_config["console"] = True

    if cache_config["freshness_ms"] < 0:
        raise ValueError(
            f"Invalid freshness_ms: {cache_config['freshness_ms']}. Must not be negative."
        )

    return AppConfig(
        cache=CacheConfig(freshness_ms=cache_config["freshness_ms"]),
        modes=ModeConfig(
            dir_mode=mode_config["dir_mode"],
            file_mode=mode_config["file_mode"],
        ),
        logging=LogConfig(
            level=log_config["level"],
            file=log_config["file"],
            console=log_config["console"],
        ),
    )
