# app.py
# Основной файл Flask-приложения с использованием паттерна Application Factory

import logging
import os

from flask import Flask
from config import Config
from extensions import db, migrate, EVALUATION_STORE_KEY
from repository import EvaluationStore

# Важно импортировать модели здесь, чтобы Alembic (Migrate) мог их видеть
from models import SnapshotRecord

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'

_log_handler = None


def configure_logging(app):
    global _log_handler
    root = logging.getLogger()
    # Обработчик добавляется один раз, даже если приложений создано несколько
    if _log_handler is None:
        _log_handler = logging.StreamHandler()
        _log_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_log_handler)
    root.setLevel(str(app.config.get('LOG_LEVEL', 'INFO')).upper())


def create_app(config_class=Config):
    # Создаем экземпляр приложения
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    # --- Инициализируем расширения С ПРИЛОЖЕНИЕМ ---
    db.init_app(app)
    migrate.init_app(app, db)

    os.makedirs(app.instance_path, exist_ok=True)
    with app.app_context():
        db.create_all()

    # Хранилище оценок живет столько же, сколько приложение: свой кэш на экземпляр
    app.extensions[EVALUATION_STORE_KEY] = EvaluationStore.from_config(app.config)
    app.logger.info(
        f'Хранилище оценок готово (ключ "{app.config["JUDGING_SNAPSHOT_KEY"]}", '
        f'кэш {app.config["JUDGING_CACHE_TTL"]} с)'
    )

    return app
