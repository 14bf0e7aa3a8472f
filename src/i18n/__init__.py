"""
Message translation for Hybrid Join Watcher.

Wraps gettext so status lines can be localized; falls back to the
untranslated English text when no catalog exists for the language.
"""

import gettext
import os
from typing import Dict

DEFAULT_LANGUAGE = "en"
DOMAIN = "hybrid_join_watcher"

_state = {"language": DEFAULT_LANGUAGE}
_catalogs: Dict[str, gettext.NullTranslations] = {}


def set_language(language: str) -> None:
    """Select the language used by subsequent calls to _()."""
    _state["language"] = language or DEFAULT_LANGUAGE


def get_language() -> str:
    """Return the currently selected language."""
    return _state["language"]


def _catalog(language: str) -> gettext.NullTranslations:
    if language not in _catalogs:
        localedir = os.path.join(os.path.dirname(__file__), "locales")
        try:
            _catalogs[language] = gettext.translation(DOMAIN, localedir, [language])
        except FileNotFoundError:
            _catalogs[language] = gettext.NullTranslations()
    return _catalogs[language]


def _(message: str) -> str:
    """Translate a message into the current language."""
    return _catalog(get_language()).gettext(message)
