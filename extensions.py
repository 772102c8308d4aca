# extensions.py
# Файл для хранения экземпляров расширений Flask

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate()

EVALUATION_STORE_KEY = 'evaluation_store'


def get_evaluation_store():
    """Возвращает EvaluationStore текущего приложения (создается в create_app)."""
    return current_app.extensions[EVALUATION_STORE_KEY]
