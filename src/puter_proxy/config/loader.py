"""src.puter_proxy.config.loader

Chargement de la configuration (TOML optionnel + variables d'environnement).

Règle de priorité: env > toml > défauts.
Le token Puter reste de préférence en env (`PUTER_TOKEN`).
"""
import os
import re
import tomllib
from pathlib import Path
from typing import Dict, Any, Mapping, Optional

from ..core.constants import PUTER_TOKEN_ENV, PUTER_BASE_URL_ENV
from ..core.exceptions import ConfigurationError
from .settings import Settings

# Cache global de configuration
_config_cache: Optional[Dict[str, Any]] = None

_ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


def _expand_env_vars(obj: Any, environ: Mapping[str, str] = None) -> Any:
    """
    Récursivement étend les variables d'environnement ${VAR} dans la config.

    Args:
        obj: Valeur à traiter (str, dict, list)
        environ: Environnement à utiliser (défaut: os.environ)

    Returns:
        Valeur avec variables d'environnement expansées
    """
    environ = os.environ if environ is None else environ
    if isinstance(obj, str):
        return _ENV_VAR_PATTERN.sub(
            lambda match: environ.get(match.group(1), match.group(0)), obj
        )
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v, environ) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item, environ) for item in obj]
    return obj


def _default_config_path() -> Path:
    # Remonte de 4 niveaux: loader.py -> config -> puter_proxy -> src -> project
    return Path(__file__).resolve().parents[3] / "config.toml"


def _clear_config_cache():
    """Vide le cache de configuration."""
    global _config_cache
    _config_cache = None


def load_config(
    config_path: str = None,
    environ: Mapping[str, str] = None
) -> Dict[str, Any]:
    """
    Charge la configuration depuis config.toml.

    Le fichier par défaut est optionnel; un chemin explicite doit exister.

    Args:
        config_path: Chemin vers le fichier config (optionnel)
        environ: Environnement pour l'expansion ${VAR} (défaut: os.environ)

    Returns:
        Dictionnaire de configuration

    Raises:
        ConfigurationError: Si le fichier explicite n'existe pas ou est invalide
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    if config_path is None:
        path = _default_config_path()
        if not path.exists():
            _config_cache = {}
            return _config_cache
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(
                message=f"Fichier de configuration non trouvé: {config_path}",
                config_key="config_path"
            )

    try:
        with open(path, "rb") as f:
            _config_cache = _expand_env_vars(tomllib.load(f), environ)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            message=f"Fichier de configuration invalide: {e}",
            config_key="config_path"
        ) from e

    return _config_cache


def reload_config(
    config_path: str = None,
    environ: Mapping[str, str] = None
) -> Dict[str, Any]:
    """
    Recharge la configuration depuis le fichier.

    Returns:
        Nouvelle configuration chargée
    """
    _clear_config_cache()
    return load_config(config_path, environ)


def load_settings(
    config_path: str = None,
    environ: Mapping[str, str] = None
) -> Settings:
    """
    Construit les Settings de l'application.

    Args:
        config_path: Chemin vers le fichier config (optionnel)
        environ: Environnement à utiliser (défaut: os.environ)

    Returns:
        Settings immuables, à passer à create_app()
    """
    environ = os.environ if environ is None else environ
    config = load_config(config_path, environ)

    puter_section = dict(config.get("puter", {}))
    if environ.get(PUTER_TOKEN_ENV):
        puter_section["token"] = environ[PUTER_TOKEN_ENV]
    if environ.get(PUTER_BASE_URL_ENV):
        puter_section["base_url"] = environ[PUTER_BASE_URL_ENV]

    # Une référence ${VAR} non résolue ne doit pas servir de token
    token = puter_section.get("token", "")
    if isinstance(token, str) and _ENV_VAR_PATTERN.fullmatch(token):
        puter_section["token"] = ""

    return Settings.from_dict(puter_section)
