from flask import Flask
from pixcode.config import carregar_config
from pixcode.error import register_erro_handlers
from pixcode.rate_limit import limiter
from pixcode.routes.pix import pix_bp


def create_app(config=None):
    app = Flask('pixcode')
    app.config.update(carregar_config(config))

    limiter.init_app(app)

    app.register_blueprint(pix_bp, url_prefix='/pix')

    register_erro_handlers(app)

    return app
