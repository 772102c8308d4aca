# config.py
# Конфигурация приложения Flask

import os


def build_database_uri(base_dir):
    # DATABASE_URL имеет приоритет, иначе локальный sqlite-файл в instance/
    database_url = os.getenv('DATABASE_URL')
    if database_url:
        return database_url
    return f'sqlite:///{os.path.join(base_dir, "instance", "judging.db")}'


class Config:
    # Абсолютный путь к каталогу проекта
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = build_database_uri(BASE_DIR)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv('SECRET_KEY', 'your-secret-key-change-me')

    # Окно свежести кэша снимка в секундах; 0 - всегда читать из хранилища
    JUDGING_CACHE_TTL = float(os.getenv('JUDGING_CACHE_TTL', '60'))
    # Ключ строки, в которой хранится снимок всех коллекций
    JUDGING_SNAPSHOT_KEY = os.getenv('JUDGING_SNAPSHOT_KEY', 'hackathon_evaluation_platform_db')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JUDGING_CACHE_TTL = 60.0
    JUDGING_SNAPSHOT_KEY = 'test_snapshot'
    LOG_LEVEL = 'DEBUG'
