import json
import logging
from pathlib import Path

from BackEnd.core.paths import settings_path
from BackEnd.core.settings import Settings

logger = logging.getLogger(__name__)


class SettingsRepo:
	"""Loads and saves Settings as a flat JSON file."""

	def __init__(self, path=None):
		self.path = Path(path) if path is not None else settings_path()

	def load_config(self) -> Settings:
		"""Return stored settings, or defaults when the file is missing or unreadable."""
		if not self.path.exists():
			return Settings()
		try:
			with open(self.path, 'r', encoding='utf-8') as f:
				data = json.load(f)
		except (OSError, ValueError) as e:
			logger.warning("Could not read settings from %s: %s", self.path, e)
			return Settings()
		if not isinstance(data, dict):
			logger.warning("Settings file %s does not hold an object, using defaults", self.path)
			return Settings()
		settings = Settings.from_dict(data)
		if not data.get("keyboardShortcuts"):
			# Older files have no shortcut list; write the defaults back.
			self.save_config(settings)
		return settings

	def save_config(self, settings: Settings) -> bool:
		"""Write settings; returns False if the file could not be written."""
		try:
			self.path.parent.mkdir(parents=True, exist_ok=True)
			tmp = self.path.with_suffix(".tmp")
			with open(tmp, 'w', encoding='utf-8') as f:
				json.dump(settings.clamped().to_dict(), f, indent=4)
			tmp.replace(self.path)
		except OSError as e:
			logger.warning("Error saving settings to %s: %s", self.path, e)
			return False
		return True
