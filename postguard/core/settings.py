from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

"""
Core Settings.

Rôle (fonctionnel) :
- Centralise la configuration du service via variables d’environnement (Pydantic Settings).
- Charge un fichier .env (racine du dépôt) pour faciliter le dev/local.
- Fournit un objet global `settings` importable dans tout le projet.

Organisation :
- App : nom, env, debug, niveau de log.
- Serveur : adresse d’écoute (HOST/PORT) utilisée par `python -m postguard`.
- Observabilité : seuil de “slow request”.
- Schéma : choix explicite de la variante (exigence `author_email` ou non).
"""

# Pointe toujours vers <racine du dépôt>/.env
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    # --- App ---
    APP_NAME: str = "PostGuard API"
    ENV: str = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Serveur ---
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # --- Observabilité ---
    SLOW_REQUEST_MS: int = 800

    # --- Schéma ---
    # La définition historique exige `author_email` sans jamais le déclarer dans `properties`
    # (aucun payload réaliste ne passe). Désactivé par défaut, activable explicitement.
    REQUIRE_AUTHOR_EMAIL: bool = False

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instance globale importable
settings = Settings()
