"""
DocBridge Application Factory
"""
from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_wtf.csrf import CSRFProtect

from config import config
from docbridge.services.factory import ServiceFactory

csrf = CSRFProtect()


def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    csrf.init_app(app)
    app.extensions['docbridge'] = ServiceFactory(app.config)

    # Register blueprints
    from docbridge.api import api_bp

    app.register_blueprint(api_bp)

    # Health check endpoint
    @app.route('/healthz')
    def healthz():
        """Health check for load balancers and monitoring"""
        services = app.extensions['docbridge']
        openai_ok, openai_msg = services.openai_ready()
        translation_ok, translation_msg = services.translation_ready()

        return jsonify({
            "status": "ok" if translation_ok else "degraded",
            "version": app.config['APP_VERSION'],
            "openai_ready": openai_ok,
            "openai_message": openai_msg,
            "translation_ready": translation_ok,
            "translation_message": translation_msg,
            "action_plan_mode": services.action_plan_mode(),
            "timestamp": datetime.now(timezone.utc).isoformat()
        })

    # Version endpoint
    @app.route('/version')
    def version():
        """Version and build info"""
        return jsonify({
            "version": app.config['APP_VERSION'],
            "build_time": app.config['BUILD_TIME'],
            "git_commit": app.config['GIT_COMMIT'],
            "features": {
                "llm_action_plan": True,
                "heuristic_action_plan": True,
                "chunked_translation": True,
            }
        })

    app.logger.info('DocBridge started (action plan mode: %s)', app.extensions['docbridge'].action_plan_mode())
    return app
