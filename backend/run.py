from pong import create_app, socketio

app = create_app()
 
if __name__ == '__main__':
    # Reloader off: it would start a second match loop in the watcher process
    socketio.run(
        app,
        host=app.config['HOST'],
        port=app.config['PORT'],
        debug=app.config['DEBUG'],
        use_reloader=False,
        allow_unsafe_werkzeug=True,
    )
