from __future__ import annotations

"""
repopacker: pack a source repository into one LLM-ready document.
"""

from repopacker.domain.constants import APP_VERSION

__version__ = APP_VERSION
