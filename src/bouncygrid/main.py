"""Application entry point for bouncygrid."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from bouncygrid.app.app import BouncyGridApp
from bouncygrid.core.config import AppConfig, load_app_config
from bouncygrid.logging_config import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "config" / "app_config.json"


def main(argv: Optional[List[str]] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging(logging.INFO)

    config_path = Path(argv[0]) if argv else DEFAULT_CONFIG
    if config_path.exists():
        app_config = load_app_config(config_path)
        logger.info("Loaded config from %s", config_path)
    elif argv:
        raise FileNotFoundError(config_path)
    else:
        app_config = AppConfig.default()

    app = BouncyGridApp(config=app_config)
    app.run()


if __name__ == "__main__":
    main()
