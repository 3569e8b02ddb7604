from pathlib import Path
import sys
import configparser
from typing import Any


def _resolve_config_file() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent / "budget.ini"
    module_dir = Path(__file__).resolve().parent
    candidate = module_dir / "budget.ini"
    if candidate.exists():
        return candidate
    return module_dir.with_name("budget.ini")


CONFIG_FILE = _resolve_config_file()
DEFAULT_DB_NAME = "budget.db"

FORMAT_DEFAULTS: dict[str, Any] = {
    "currency_symbol": "$",
    "decimals": 2,
}

_FORMAT_INT_KEYS = {"decimals"}


def _load_cfg() -> configparser.ConfigParser:
    cfg = configparser.ConfigParser()
    if CONFIG_FILE.exists():
        cfg.read(CONFIG_FILE, encoding="utf-8")
    return cfg


def _save_cfg(cfg: configparser.ConfigParser) -> None:
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        cfg.write(f)


def default_db_path() -> Path:
    return CONFIG_FILE.with_name(DEFAULT_DB_NAME)


def load_last_db() -> Path | None:
    """Return the remembered database, or None if unset or since removed."""
    remembered = _load_cfg().get("app", "db_path", fallback="")
    if not remembered:
        return None
    path = Path(remembered).expanduser()
    return path if path.exists() else None


def save_last_db(path: Path | str | None) -> None:
    cfg = _load_cfg()
    if not cfg.has_section("app"):
        cfg.add_section("app")
    if path:
        cfg.set("app", "db_path", str(Path(path).expanduser().resolve()))
    else:
        cfg.remove_option("app", "db_path")
    _save_cfg(cfg)


def load_format_settings() -> dict[str, Any]:
    cfg = _load_cfg()
    updated = False
    if "format" not in cfg:
        cfg["format"] = {}
        updated = True
    section = cfg["format"]
    settings: dict[str, Any] = {}
    for key, default in FORMAT_DEFAULTS.items():
        raw_value = section.get(key)
        if raw_value is None:
            section[key] = str(default)
            raw_value = str(default)
            updated = True
        try:
            if key in _FORMAT_INT_KEYS:
                value = int(float(raw_value))
                if value < 0:
                    raise ValueError(raw_value)
                settings[key] = value
            else:
                settings[key] = raw_value
        except (TypeError, ValueError):
            # Fallback to default on invalid values
            settings[key] = default
            section[key] = str(default)
            updated = True
    if updated:
        _save_cfg(cfg)
    return settings


# Mutable global used by db.get_conn; always reference via config.DB_PATH
DB_PATH: Path | None = load_last_db()
