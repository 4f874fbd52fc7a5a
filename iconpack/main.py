"""Точка входа в приложение."""
import logging
import os

from iconpack.app import IconPackApp


def configure_logging() -> None:
    """Лог в консоль; уровень берётся из `ICONPACK_LOG_LEVEL` (по умолчанию INFO)."""
    level_name = os.environ.get("ICONPACK_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    configure_logging()
    logging.info("PWA Icon Generator starting...")
    app = IconPackApp()
    app.mainloop()


if __name__ == "__main__":
    main()
