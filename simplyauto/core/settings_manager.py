"""Settings manager — reads/writes settings.ini via configparser."""
from __future__ import annotations

from configparser import ConfigParser
from pathlib import Path

from simplyauto.core.config import (
    AutoClickerConfig, LoopMode, PlaybackConfig, PositionMode, RepeatMode,
    interval_from_parts,
)
from simplyauto.core.events import ClickType, MouseButton

DEFAULT_HOTKEYS: dict[str, str] = {
    "autoclicker": "F6",
    "record":      "F9",
    "playback":    "F10",
    "stop":        "F11",
}


def _enum_value(enum_cls, text: str, fallback):
    try:
        return enum_cls(text.strip().lower())
    except ValueError:
        return fallback


class SettingsManager:
    def __init__(self, ini_path: Path) -> None:
        self.ini_path = ini_path
        self.config = ConfigParser(comment_prefixes=("#", ";"), inline_comment_prefixes=("#",))
        if ini_path.exists():
            self.config.read(ini_path, encoding="utf-8")

    # ------------------------------------------------------------------
    # Generic getters
    # ------------------------------------------------------------------
    def get(self, section: str, key: str, fallback: str = "") -> str:
        return self.config.get(section, key, fallback=fallback)

    def getint(self, section: str, key: str, fallback: int = 0) -> int:
        try:
            return self.config.getint(section, key, fallback=fallback)
        except ValueError:
            return fallback

    def getfloat(self, section: str, key: str, fallback: float = 0.0) -> float:
        try:
            return self.config.getfloat(section, key, fallback=fallback)
        except ValueError:
            return fallback

    def getbool(self, section: str, key: str, fallback: bool = False) -> bool:
        try:
            return self.config.getboolean(section, key, fallback=fallback)
        except ValueError:
            return fallback

    def set(self, section: str, key: str, value: str, save: bool = True) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, key, value)
        if save:
            self.save()

    def save(self) -> None:
        self.ini_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.ini_path, "w", encoding="utf-8") as f:
            self.config.write(f)

    # ------------------------------------------------------------------
    # Hotkeys
    # ------------------------------------------------------------------
    def hotkey(self, action: str) -> str:
        return self.get("HOTKEYS", action, DEFAULT_HOTKEYS.get(action, ""))

    def set_hotkey(self, action: str, key: str) -> None:
        self.set("HOTKEYS", action, key)

    @property
    def always_on_top(self) -> bool:
        return self.getbool("WINDOW", "always_on_top", False)

    # ------------------------------------------------------------------
    # Auto-clicker
    # ------------------------------------------------------------------
    @property
    def autoclicker_config(self) -> AutoClickerConfig:
        """Build the config from [AUTOCLICKER]; does not validate."""
        s = "AUTOCLICKER"
        interval = interval_from_parts(
            self.getint(s, "interval_hours", 0),
            self.getint(s, "interval_mins",  0),
            self.getint(s, "interval_secs",  1),
            self.getint(s, "interval_ms",    0),
        )
        jitter = self.getint(s, "random_offset_ms", 0) if self.getbool(s, "random_enabled", False) else 0
        return AutoClickerConfig(
            interval_ms   = interval,
            jitter_ms     = jitter,
            button        = _enum_value(MouseButton,  self.get(s, "button", "left"),       MouseButton.LEFT),
            click_type    = _enum_value(ClickType,    self.get(s, "click_type", "single"), ClickType.SINGLE),
            repeat_mode   = _enum_value(RepeatMode,   self.get(s, "repeat_mode", "until_stopped"),
                                        RepeatMode.UNTIL_STOPPED),
            repeat_count  = self.getint(s, "repeat_count", 1),
            position_mode = _enum_value(PositionMode, self.get(s, "position_mode", "current"),
                                        PositionMode.CURRENT),
            fixed_x       = self.getint(s, "fixed_x", 0),
            fixed_y       = self.getint(s, "fixed_y", 0),
        )

    def store_autoclicker_config(self, cfg: AutoClickerConfig) -> None:
        s = "AUTOCLICKER"
        hours, rest = divmod(cfg.interval_ms, 3_600_000)
        mins,  rest = divmod(rest, 60_000)
        secs,  ms   = divmod(rest, 1000)
        for key, value in (
            ("interval_hours",   hours),
            ("interval_mins",    mins),
            ("interval_secs",    secs),
            ("interval_ms",      ms),
            ("random_enabled",   str(cfg.jitter_ms > 0).lower()),
            ("random_offset_ms", cfg.jitter_ms),
            ("button",           cfg.button.value),
            ("click_type",       cfg.click_type.value),
            ("repeat_mode",      cfg.repeat_mode.value),
            ("repeat_count",     cfg.repeat_count),
            ("position_mode",    cfg.position_mode.value),
            ("fixed_x",          cfg.fixed_x),
            ("fixed_y",          cfg.fixed_y),
        ):
            self.set(s, key, str(value), save=False)
        self.save()

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    @property
    def playback_config(self) -> PlaybackConfig:
        s = "PLAYBACK"
        speed = self.get(s, "speed", "1").strip().lower().rstrip("x")
        try:
            speed_value = float(speed)
        except ValueError:
            speed_value = 1.0
        return PlaybackConfig(
            speed      = speed_value,
            loop_mode  = _enum_value(LoopMode, self.get(s, "loop_mode", "once"), LoopMode.ONCE),
            loop_count = max(1, self.getint(s, "loop_count", 1)),
        ).normalized()

    def store_playback_config(self, cfg: PlaybackConfig) -> None:
        s = "PLAYBACK"
        self.set(s, "speed",      f"{cfg.speed:g}x",     save=False)
        self.set(s, "loop_mode",  cfg.loop_mode.value,   save=False)
        self.set(s, "loop_count", str(cfg.loop_count),   save=False)
        self.save()
