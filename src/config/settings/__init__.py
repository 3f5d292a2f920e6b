"""Agregador de settings do SDK Kulipa.

Re-exporta settings e funções de carregamento.
"""

from __future__ import annotations

from config.settings.kulipa import (
    KulipaEnvironment,
    KulipaSettings,
    get_kulipa_settings,
)

__all__ = [
    "KulipaEnvironment",
    "KulipaSettings",
    "get_kulipa_settings",
]
