import uvicorn

from postguard.core.settings import settings
from postguard.main import app

"""
Entrypoint `python -m postguard`.

Rôle (fonctionnel) :
- Démarre uvicorn sur HOST:PORT (settings).
- log_config=None : uvicorn conserve la configuration JSON posée par setup_logging().
- L’import de postguard.main compile le schéma : en cas d’échec, rien n’écoute.
"""


def main() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
