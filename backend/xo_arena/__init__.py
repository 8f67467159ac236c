import logging

import click
from flask import Flask, jsonify
from flask_cors import CORS
from flask_socketio import SocketIO

from xo_arena.config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, flask_app.config.get('LOG_LEVEL', 'INFO'), logging.INFO))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from xo_arena.main import main
    flask_app.register_blueprint(main)

    from xo_arena.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # A fresh router per app keeps the room table empty at startup
    from xo_arena.services.rooms import SessionRouter
    from xo_arena.socketio_events import register_socketio_handlers
    router = SessionRouter(name_max_length=flask_app.config.get('PLAYER_NAME_MAX_LENGTH', 24))
    flask_app.extensions['xo_arena'] = router
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    @flask_app.errorhandler(404)
    def not_found(exc):
        return jsonify({'error': 'Not found'}), 404

    @click.command('list-rooms')
    def list_rooms_command():
        """Prints one line per active room."""
        summaries = router.registry.list_rooms()
        if not summaries:
            click.echo('No active rooms.')
            return
        for room in summaries:
            names = ', '.join(f"{p['name']} ({p['symbol']})" for p in room['players'])
            click.echo(f"{room['code']}  {room['state']:<11}  round={room['round']}  {names}")

    flask_app.cli.add_command(list_rooms_command)

    return flask_app
