import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

import config
from watchlist.exceptions import ConfigFormatError, MissingConfigError
from watchlist.wiki_config import Settings

logger = logging.getLogger(__name__)


def xdg_config_dirs() -> list[Path]:
    """$XDG_CONFIG_HOME followed by $XDG_CONFIG_DIRS, with the XDG defaults."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    config_dirs = os.environ.get("XDG_CONFIG_DIRS") or "/etc/xdg"
    return [Path(config_home)] + [Path(d) for d in config_dirs.split(os.pathsep) if d]


class ConfigSource(BaseModel):
    dirs: list[Path] = []
    file_name: str = config.CONFIG_FILE_NAME

    @classmethod
    def default(cls) -> "ConfigSource":
        return cls(dirs=xdg_config_dirs())

    @property
    def candidates(self) -> list[Path]:
        return [d / self.file_name for d in self.dirs]

    def load(self) -> Settings:
        for path in self.candidates:
            try:
                text = path.read_text(encoding="utf-8")
            except OSError:
                continue
            logger.debug("Reading configuration from %s", path)
            try:
                return Settings.model_validate_json(text)
            except ValidationError as e:
                raise ConfigFormatError(path, e) from e
        raise MissingConfigError(self.candidates)
