from __future__ import annotations

import configparser
import logging

from PySide6.QtCore import QObject

from vectorportal.core.caret_blinker import DEFAULT_BLINK_INTERVAL_MS, MIN_BLINK_INTERVAL_MS
from vectorportal.core.curve import DEFAULT_WIDTH
from vectorportal.core.drawing_context import PALETTE


logger = logging.getLogger(__name__)


class SettingsController(QObject):
    """Manages application settings persistence."""

    DEFAULT_DRAWING_SETTINGS = {
        "width": DEFAULT_WIDTH,
        "side_count": 3,
        "color": "White",
        "background": "Black",
    }

    DEFAULT_EDITING_SETTINGS = {
        "hit_radius": 10.0,
        "scroll_step": 5.0,
    }

    DEFAULT_DATA_FILE = "resources/data.json"

    def __init__(self, path: str = "settings.ini"):
        super().__init__()
        self.path = path
        self.config = configparser.ConfigParser()
        self.config.read(self.path)

        for section in ("General", "Drawing", "Editing", "Caret"):
            if not self.config.has_section(section):
                self.config.add_section(section)

        self.data_file = self.config.get(
            "General", "data_file", fallback=self.DEFAULT_DATA_FILE
        )

        self.width = self._get_float(
            "Drawing", "width", self.DEFAULT_DRAWING_SETTINGS["width"]
        )
        if self.width <= 0:
            self.width = self.DEFAULT_DRAWING_SETTINGS["width"]
        self.side_count = self._get_int(
            "Drawing", "side_count", self.DEFAULT_DRAWING_SETTINGS["side_count"]
        )
        self.color_name = self._get_palette_name(
            "color", self.DEFAULT_DRAWING_SETTINGS["color"]
        )
        self.background_name = self._get_palette_name(
            "background", self.DEFAULT_DRAWING_SETTINGS["background"]
        )

        self.hit_radius = self._get_float(
            "Editing", "hit_radius", self.DEFAULT_EDITING_SETTINGS["hit_radius"]
        )
        self.scroll_step = self._get_float(
            "Editing", "scroll_step", self.DEFAULT_EDITING_SETTINGS["scroll_step"]
        )

        self.blink_interval_ms = max(
            MIN_BLINK_INTERVAL_MS,
            self._get_int("Caret", "blink_interval_ms", DEFAULT_BLINK_INTERVAL_MS),
        )
        self._sync_to_config()

    @property
    def effective_hit_radius(self) -> float | None:
        """Hit radius for the state machine; ``None`` when unlimited."""
        if self.hit_radius <= 0:
            return None
        return self.hit_radius

    def save_settings(self) -> bool:
        """Persist settings to disk."""
        self._sync_to_config()
        try:
            with open(self.path, "w") as configfile:
                self.config.write(configfile)
        except OSError as e:
            logger.error("Could not write %s: %s", self.path, e)
            return False
        return True

    def _get_float(self, section, option, fallback):
        try:
            return self.config.getfloat(section, option)
        except (configparser.NoOptionError, ValueError):
            return fallback

    def _get_int(self, section, option, fallback):
        try:
            return self.config.getint(section, option)
        except (configparser.NoOptionError, ValueError):
            return fallback

    def _get_palette_name(self, option, fallback):
        raw_value = self.config.get("Drawing", option, fallback=fallback)
        if raw_value not in PALETTE:
            logger.warning("Unknown palette color %r for %s; using %s", raw_value, option, fallback)
            return fallback
        return raw_value

    def _sync_to_config(self):
        self.config.set("General", "data_file", self.data_file)
        self.config.set("Drawing", "width", str(self.width))
        self.config.set("Drawing", "side_count", str(self.side_count))
        self.config.set("Drawing", "color", self.color_name)
        self.config.set("Drawing", "background", self.background_name)
        self.config.set("Editing", "hit_radius", str(self.hit_radius))
        self.config.set("Editing", "scroll_step", str(self.scroll_step))
        self.config.set("Caret", "blink_interval_ms", str(self.blink_interval_ms))
