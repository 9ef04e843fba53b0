# install_dashboard/__init__.py
import os
from flask import Flask
from install_dashboard.config import Config
from install_dashboard.routes import register_blueprints
from install_dashboard.utils.logger import setup_logging
from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), '.env'))


def create_app(config_overrides=None):
    basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
    template_path = os.path.join(basedir, 'templates')
    app = Flask(__name__, template_folder=template_path)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    app.secret_key = app.config["SECRET_KEY"]
    setup_logging(app)
    register_blueprints(app)

    return app
