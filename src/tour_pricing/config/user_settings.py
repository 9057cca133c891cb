"""
Settings Resolver - builds complete UserSettings from persisted fragments.

Persisted settings are overlaid field-by-field on the compiled-in defaults.
Nested objects (unitCosts) are overlaid key-by-key, so a category added to
the defaults later still gets a value while saved overrides survive.
"""
import copy
import logging
from typing import Optional

from ..engine.models import LANGUAGES, THEMES, UserSettings
from ..services.ids import new_user_id

logger = logging.getLogger(__name__)


# userId is generated per resolution, never defaulted
DEFAULT_USER_SETTINGS = {
    'exchangeRate': 36.50,
    'profitMargin': 25,
    'language': 'en',
    'theme': 'light',
    'unitCosts': {
        'guide': 150,
        'medical': 20,
        'transport': 200,
        'logistics': 15,
    },
}

_CHOICES = {
    'language': LANGUAGES,
    'theme': THEMES,
}


def overlay(base: dict, patch: dict) -> dict:
    """
    Overlay `patch` on `base` field by field.

    Nested dicts on both sides are overlaid recursively; any other value in
    `patch` replaces the base value. Neither argument is modified.
    """
    result = copy.deepcopy(base)
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = overlay(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _sanitize(patch: dict, schema: dict) -> dict:
    """Keep only the fields of `patch` that fit the shape of `schema`."""
    clean = {}
    for key, value in patch.items():
        if key not in schema or value is None:
            continue
        expected = schema[key]
        if isinstance(expected, dict):
            if isinstance(value, dict):
                clean[key] = _sanitize(value, expected)
            else:
                logger.warning("Ignoring settings field %r: expected an object", key)
        elif _is_number(expected):
            if _is_number(value):
                clean[key] = value
            else:
                logger.warning("Ignoring settings field %r: expected a number", key)
        elif isinstance(value, str) and value in _CHOICES.get(key, (value,)):
            clean[key] = value
        else:
            logger.warning("Ignoring settings field %r: unsupported value %r", key, value)
    return clean


def _defaults_record(defaults: Optional[dict] = None) -> dict:
    record = copy.deepcopy(DEFAULT_USER_SETTINGS if defaults is None else defaults)
    record['userId'] = new_user_id()
    return record


def resolve_settings(persisted: Optional[dict] = None, defaults: Optional[dict] = None) -> UserSettings:
    """
    Resolve complete settings from an optional persisted fragment.

    Args:
        persisted: Settings record recovered from storage (may be partial,
            missing or corrupt)
        defaults: Optional replacement for DEFAULT_USER_SETTINGS

    Returns:
        Fully populated UserSettings. Never raises.
    """
    record = _defaults_record(defaults)

    if persisted is None:
        return UserSettings.from_dict(record)
    if not isinstance(persisted, dict):
        logger.warning("Persisted settings are not an object, using defaults")
        return UserSettings.from_dict(record)

    patch = _sanitize(persisted, record)
    user_id = persisted.get('userId')
    if isinstance(user_id, str) and user_id:
        patch['userId'] = user_id

    return UserSettings.from_dict(overlay(record, patch))


def merge_settings(current: UserSettings, partial: dict) -> UserSettings:
    """
    Merge a partial settings record over existing settings.

    Uses the same overlay policy as resolve_settings. userId is immutable
    and any value for it in `partial` is ignored.
    """
    base = _defaults_record()
    base = overlay(base, _sanitize(current.to_dict(), base))
    base['userId'] = current.user_id

    patch = _sanitize(partial or {}, base)
    patch.pop('userId', None)
    return UserSettings.from_dict(overlay(base, patch))
