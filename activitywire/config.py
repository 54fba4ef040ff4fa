from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import tomli
import tomli_w
from xdg import xdg_config_home

PACKAGE_NAME = "activitywire"


class InvalidConfigError(Exception):
    pass


@dataclass
class Output:
    indent: int = 2
    """Indentation of emitted JSON (0 for compact output)"""
    sort_keys: bool = False
    """Sort keys of emitted JSON objects"""
    ensure_ascii: bool = False
    """Escape non-ASCII characters in emitted JSON"""

    def __post_init__(self):
        if self.indent < 0:
            raise InvalidConfigError(f"Indent: must not be negative, got {self.indent}")

    def json_options(self) -> dict[str, Any]:
        return {
            "indent": self.indent or None,
            "sort_keys": self.sort_keys,
            "ensure_ascii": self.ensure_ascii,
        }


@dataclass
class Logging:
    verbose: bool = False
    """Log codec activity at debug level"""
    log_file: str = ""
    """Path to a log file, logs go to stderr when empty"""


@dataclass
class DefaultConfig:
    output: Output = field(default_factory=Output)
    logging: Logging = field(default_factory=Logging)


class Config:
    config: "Config | None" = None

    def __init__(self, config_file: Optional[Path] = None) -> None:
        self.config_file = config_file or self._config_root().joinpath("config.toml")
        self._output: Output
        self._logging: Logging
        self._load_config()
        Config.config = self

    @property
    def output(self):
        return self._output

    @property
    def logging(self):
        return self._logging

    @staticmethod
    def _config_root() -> Path:
        root = xdg_config_home().joinpath(PACKAGE_NAME).resolve()
        if not root.is_dir():
            root.mkdir(parents=True, exist_ok=True)
        return root

    def _load_config(self) -> None:
        if not self.config_file.is_file():
            self._write_config(self._default())
            _conf = self._default()
        else:
            with open(self.config_file, "rb") as f:
                try:
                    _conf = tomli.load(f)
                except tomli.TOMLDecodeError as exc:
                    raise InvalidConfigError(f"{self.config_file}: {exc}") from exc

        try:
            self._output = Output(**_conf.get("output", {}))
            self._logging = Logging(**_conf.get("logging", {}))
        except TypeError as exc:
            raise InvalidConfigError(f"{self.config_file}: {exc}") from exc

    def _write_config(self, config: dict[str, Any]) -> None:
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "wb") as f:
            tomli_w.dump(config, f)

    def _default(self) -> dict[str, Any]:
        return asdict(DefaultConfig())

    def save(self):
        self._write_config(asdict(DefaultConfig(self._output, self._logging)))
        self._load_config()

    @classmethod
    def get_config(cls) -> "Config":
        return Config.config or cls()
