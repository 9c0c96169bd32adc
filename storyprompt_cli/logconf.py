# storyprompt_cli/logconf.py
import logging, sys, pathlib, datetime


def init(level: str = "INFO", log_dir: pathlib.Path | None = None):
    """Configure root logger once per run."""
    fmt = "%(asctime)s | %(levelname)-5s | %(module)s | %(message)s"
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(log_dir / f"storyprompt_{datetime.date.today()}.log", encoding="utf-8")
        )
    logging.basicConfig(
        level=getattr(logging, level.upper(), 20),
        format=fmt,
        handlers=handlers,
        force=True,
    )
