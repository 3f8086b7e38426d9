"""
Focail Game Server - Main Entry Point

This is the main entry point for the game server.
It initializes the game service and starts the Flask-SocketIO application.
"""

import os
from focail import create_app
from focail.config import config
from focail.services.game_service import initialize_game_service
from focail.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    config_class = config.get(os.getenv('FLASK_ENV', 'default'), config['default'])

    try:
        print("Initializing services...")

        game_service = initialize_game_service(
            max_guesses=config_class.MAX_GUESSES,
            default_language=config_class.DEFAULT_LANGUAGE
        )
        print(f"✓ Game service initialized ({', '.join(game_service.languages)})")

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Focail Server Starting")

        print(f"\nStarting Focail Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Focail Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
