import os
import logging
from datetime import date
from logging.handlers import RotatingFileHandler

import click
import jwt
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import config
from extensions import db, migrate, login_manager, limiter, cors


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        log_dir = app.config.get('LOG_DIR', 'logs')
        # Create logs directory if it doesn't exist
        if not os.path.exists(log_dir):
            os.mkdir(log_dir)

        # File handler for errors
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'famlist.log'),
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('FamList backend startup')
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        app.logger.info('FamList backend startup (DEBUG mode)')


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)
    # Default SQLite database lives in the instance folder
    os.makedirs(app.instance_path, exist_ok=True)

    # Configure logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    limiter.init_app(app)
    cors.init_app(
        app,
        resources={r'/api/*': {'origins': app.config['CLIENT_URL']}},
        supports_credentials=True,
    )

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        return response

    configure_authentication(app)

    # Import models to ensure they're registered with SQLAlchemy
    with app.app_context():
        import models  # noqa: F401

    # Register blueprints
    from blueprints.auth import auth_bp
    from blueprints.family import family_bp
    from blueprints.shopping import shopping_bp
    from blueprints.health import health_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(family_bp)
    app.register_blueprint(shopping_bp)
    app.register_blueprint(health_bp)

    # Create database tables
    with app.app_context():
        db.create_all()

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    return app


def configure_authentication(app):
    """Resolve ``Authorization: Bearer <token>`` to a User via Flask-Login."""
    from services.token_service import TokenService

    @login_manager.request_loader
    def load_user_from_request(req):
        from models.users import User
        token = TokenService.token_from_header(req.headers.get('Authorization'))
        if token is None:
            return None
        try:
            payload = TokenService.decode(token)
        except jwt.InvalidTokenError as e:
            app.logger.info(f'Rejected bearer token: {e}')
            return None
        user = db.session.get(User, payload['user_id'])
        if user is None or not user.is_active:
            return None
        return user

    @login_manager.unauthorized_handler
    def unauthorized():
        if request.headers.get('Authorization'):
            return jsonify({'error': 'Invalid or expired token'}), 401
        return jsonify({'error': 'Access token required'}), 401


def register_error_handlers(app):
    """Register global error handlers, all rendering ``{"error": ...}``"""

    def _error(error, status):
        return jsonify({'error': error.description}), status

    @app.errorhandler(400)
    def bad_request_error(error):
        return _error(error, 400)

    @app.errorhandler(401)
    def unauthorized_error(error):
        return _error(error, 401)

    @app.errorhandler(403)
    def forbidden_error(error):
        return _error(error, 403)

    @app.errorhandler(404)
    def not_found_error(error):
        return _error(error, 404)

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return _error(error, 405)

    @app.errorhandler(409)
    def conflict_error(error):
        return _error(error, 409)

    @app.errorhandler(429)
    def rate_limit_error(error):
        return jsonify({'error': f'Too many requests: {error.description}'}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f'Internal Server Error: {error}')
        return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(Exception)
    def unhandled_exception(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code
        db.session.rollback()
        app.logger.exception(f'Unhandled exception on {request.method} {request.path}')
        return jsonify({'error': 'Internal server error'}), 500


def register_commands(app):
    """Register Flask CLI commands."""

    @app.cli.group()
    def shopping():
        """Manage weekly shopping lists."""
        pass

    @shopping.command('week')
    @click.option('--date', 'on_date', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
                  help='Date to resolve (YYYY-MM-DD), defaults to today.')
    def show_week(on_date):
        """Print the shopping-list week window for a date."""
        from services.shopping_list_service import ShoppingListService
        target = on_date.date() if on_date else date.today()
        week_start, week_end = ShoppingListService.week_bounds(target)
        click.echo(f'{target.isoformat()}: week starts {week_start.isoformat()}, ends {week_end.isoformat()}')

    @shopping.command('archive-stale')
    def archive_stale():
        """Archive active lists left over from previous weeks."""
        from services.shopping_list_service import ShoppingListService
        count = ShoppingListService.archive_stale_lists()
        click.echo(f'Archived {count} stale shopping list(s).')

    @app.cli.group()
    def users():
        """Manage user accounts."""
        pass

    @users.command('unlock')
    @click.argument('email')
    def unlock_user(email):
        """Clear the login lockout for the user with EMAIL."""
        from models.users import User
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            click.echo(f'ERROR: No user found with email "{email}"', err=True)
            return
        user.reset_failed_logins()
        click.echo(f'SUCCESS: "{user.full_name}" ({user.email}) unlocked.')


if __name__ == '__main__':
    app = create_app()
    # SECURITY: Only bind to localhost in development
    # Never use 0.0.0.0 with debug mode - it exposes the debugger to the network
    app.run(host='127.0.0.1', port=int(os.environ.get('PORT', 3001)), debug=True)
