# install_dashboard/routes/__init__.py
from .home import home_bp
from .technicians import technicians_bp
from .install_tracker import install_tracker_bp


def register_blueprints(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(technicians_bp)
    app.register_blueprint(install_tracker_bp)
