from xo_arena import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use the SocketIO server so websockets work in dev
    socketio.run(
        app,
        host=app.config['HOST'],
        port=app.config['PORT'],
        debug=app.config['DEBUG'],
        # The Werkzeug dev server is only allowed while debugging
        allow_unsafe_werkzeug=app.config['DEBUG'],
    )
