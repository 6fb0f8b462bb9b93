"""
Configuration settings for the Department Records & Analytics service
"""

import os


class Config:
    """Base configuration class"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dept-records-secret-key'

    # Database settings (in-memory SQLite, nothing is written to disk)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Seed settings
    SEED_ON_STARTUP = os.environ.get('SEED_ON_STARTUP', '1') == '1'
    SEED_DATA_PATH = os.environ.get('SEED_DATA_PATH')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SEED_ON_STARTUP = False
    SEED_DATA_PATH = None
    LOG_LEVEL = 'WARNING'
