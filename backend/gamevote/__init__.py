from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

SEED_GAMES = ['Counter-Strike 2', 'League of Legends', 'Minecraft', 'Rocket League', 'Chess']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    from gamevote.services.normalizer import POLICIES
    policy = flask_app.config.get('GAME_NAME_POLICY', 'aggressive')
    if policy not in POLICIES:
        raise ValueError(f"GAME_NAME_POLICY must be one of {POLICIES}, got {policy!r}")

    origins = flask_app.config.get('CORS_ORIGINS') or allowed_origins

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    from gamevote.main import main
    flask_app.register_blueprint(main)

    from gamevote.api.votes import votes
    flask_app.register_blueprint(votes, url_prefix='/api')

    from gamevote.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    from gamevote.exceptions import GameVoteError, StorageError

    @flask_app.errorhandler(GameVoteError)
    def handle_gamevote_error(exc):
        if isinstance(exc, StorageError):
            flask_app.logger.exception(f"[error] {exc}")
            return jsonify({'error': 'Internal server error'}), exc.status_code
        return jsonify({'error': exc.message}), exc.status_code

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Authentication required'}), 401

    from gamevote.services.users import get_user_by_id

    @login_manager.user_loader
    def load_user(user_id):
        return get_user_by_id(user_id)

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from gamevote.services.registry import resolve_or_create
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            for name in SEED_GAMES:
                resolve_or_create(name)
            click.echo('Database has been reset and seeded!')

    @click.command('recount-votes')
    def recount_votes_command():
        """Rebuilds every game's vote counter from the stored votes."""
        from gamevote.services.votes import recount_votes
        with flask_app.app_context():
            corrected = recount_votes()
            click.echo(f'Recounted votes: {corrected} counter(s) corrected.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(recount_votes_command)

    return flask_app
