from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import json
import time
import click
from config import Config

NAMESPACE = '/ws'

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or '*'

    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One shared match per process; handlers and routes reach it through extensions
    from pong.services.match import Match, MatchSettings, BroadcastScheduler
    settings = MatchSettings.from_mapping(flask_app.config)
    match = Match(settings, logger=flask_app.logger)
    scheduler = BroadcastScheduler(match, publish=_publish, logger=flask_app.logger)
    flask_app.extensions['pong'] = {'match': match, 'scheduler': scheduler}

    from pong.main import main
    flask_app.register_blueprint(main)

    from pong.api.match import match_api
    flask_app.register_blueprint(match_api, url_prefix='/api/match')

    from pong.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('match-settings')
    def match_settings_command():
        """Prints the effective match settings."""
        click.echo(json.dumps(settings.to_dict(), indent=2, sort_keys=True))

    flask_app.cli.add_command(match_settings_command)

    if not flask_app.config.get('TESTING') or flask_app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        socketio.start_background_task(scheduler.run, clock=time.monotonic, sleep=socketio.sleep)

    return flask_app


def _publish(event) -> None:
    # Called from the scheduler loop, outside any request context
    socketio.emit(event.name, event.payload, to=event.to, namespace=NAMESPACE)
