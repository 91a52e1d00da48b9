"""
Restaurant Booking Backend - Main Flask Application
"""
from flask import Flask, jsonify, g
from flask_cors import CORS
from config import Config
from firebase_service import FirebaseService
from routes.booking_routes import booking_bp
from routes.email_routes import email_bp
from routes.forum_routes import forum_bp
from routes.settings_routes import settings_bp
from routes.table_routes import table_bp
from routes.template_routes import template_bp
from routes.waitlist_routes import waitlist_bp
import logging
import os

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def get_firebase_service():
    """
    Get FirebaseService instance for current request (singleton per request)
    Uses Flask's g object for request-scoped service instances
    """
    if 'firebase_service' not in g:
        g.firebase_service = FirebaseService()
    return g.firebase_service

def create_app(config_object=Config, firebase_service=None):
    """
    Create and configure Flask application

    Args:
        config_object: Configuration class or object
        firebase_service: Pre-built Firebase service, used instead of the SDK singleton
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Enable CORS
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # Make service helper available to all routes
    if firebase_service is not None:
        app.get_firebase_service = lambda: firebase_service
    else:
        app.get_firebase_service = get_firebase_service

        # Initialize Firebase connection test
        try:
            FirebaseService()
        except Exception as e:
            logger.error(f"Failed to initialize Firebase: {str(e)}")

    app.register_blueprint(booking_bp, url_prefix='/api')
    app.register_blueprint(email_bp, url_prefix='/api')
    app.register_blueprint(forum_bp, url_prefix='/api')
    app.register_blueprint(settings_bp, url_prefix='/api')
    app.register_blueprint(table_bp, url_prefix='/api')
    app.register_blueprint(template_bp, url_prefix='/api')
    app.register_blueprint(waitlist_bp, url_prefix='/api')

    # Health check endpoint
    @app.route('/api/health', methods=['GET'])
    def health_check():
        try:
            app.get_firebase_service()
            firebase_connected = True
        except Exception:
            firebase_connected = False
        return jsonify({
            'status': 'healthy',
            'firebase_connected': firebase_connected
        }), 200

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Endpoint not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({'error': 'Internal server error'}), 500

    return app

if __name__ == '__main__':
    app = create_app()
    port = int(os.environ.get('PORT', 5000))
    app.run(debug=False, host='0.0.0.0', port=port)
