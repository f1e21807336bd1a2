import logging
from pathlib import Path

from shop.domain.Settings import Settings
from shop.infra.json_store import JsonRepository, JsonStore
from shop.infra.paths import DATA_DIR, SETTINGS_FILENAME, data_file

logger = logging.getLogger(__name__)


class SettingsRepository(JsonRepository):
    def __init__(self, data_dir: Path = DATA_DIR):
        super().__init__(JsonStore(data_file(SETTINGS_FILENAME, data_dir), default_factory=dict))
        raw = self._load_raw()
        try:
            self._settings = Settings.from_dict(raw)
        except ValueError as e:
            logger.error("Invalid settings file, using defaults: %s", e)
            self._settings = Settings()

    def _snapshot(self):
        return self._settings.to_dict()

    def get(self) -> Settings:
        return self._settings

    def update(self, **fields) -> Settings:
        data = self._settings.to_dict()
        data.update({k: v for k, v in fields.items() if v is not None})
        self._settings = Settings.from_dict(data)
        self._persist()
        return self._settings
