# budget_ledger/core/log.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Настраивает корневой логгер приложения (stderr, единый формат)."""
    # basicConfig ничего не делает, если хендлеры уже есть (uvicorn, pytest)
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("budget_ledger").setLevel(level.upper())
