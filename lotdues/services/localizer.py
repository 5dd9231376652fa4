"""Spanish labels for reports, statuses and API errors.

translations.json groups labels by area ("funds", "status", "errors", ...).
The file is flattened once at import into dotted keys, so lookups are a single
dict access:

    from lotdues.services.localizer import t

    t("funds.works")                              # "Obras"
    t("errors.lot_not_found", lot_id="E2-1")      # "Lote E2-1 no encontrado"
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TRANSLATIONS_PATH = Path(__file__).parent.parent / "static" / "translations.json"


def _flatten(tree: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for name, value in tree.items():
        key = f"{prefix}{name}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{key}."))
        elif isinstance(value, str):
            flat[key] = value
        else:
            logger.warning("Ignoring non-text translation %s", key)
    return flat


def load_translations(path: Path = TRANSLATIONS_PATH) -> dict[str, str]:
    """Read a translations file into a flat {dotted key: text} mapping.

    A missing or malformed file is logged and yields an empty mapping, in
    which case every lookup falls back to its key.
    """
    try:
        with open(path, encoding="utf-8") as f:
            return _flatten(json.load(f))
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.error("Failed to load translations from %s: %s", path, e)
        return {}


_TRANSLATIONS = load_translations()


def t(key: str, **kwargs: Any) -> str:
    """Translate a dotted key, filling {placeholders} from kwargs.

    Unknown keys and group names (e.g. "status") come back unchanged. A
    missing placeholder returns the unformatted template.
    """
    text = _TRANSLATIONS.get(key)
    if text is None:
        logger.warning("Translation key not found: %s", key)
        return key

    if not kwargs:
        return text
    try:
        return text.format(**kwargs)
    except KeyError as e:
        logger.warning("Missing placeholder %s for key: %s", e, key)
        return text


__all__ = ["t", "load_translations"]
