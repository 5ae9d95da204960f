# app.py
# Flask app for one configured port: log the caller, then answer with the port's text.

from flask import Flask, Response, request

from probe_server.access_log import AccessLog
from probe_server.config import PortBinding

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def create_app(binding: PortBinding, access_log: AccessLog) -> Flask:
    app = Flask(__name__)

    @app.route("/", defaults={"path": ""}, methods=METHODS)
    @app.route("/<path:path>", methods=METHODS)
    def respond(path):
        """Every path answers the same way; the log row is written before the reply."""
        client_ip = request.environ.get("REMOTE_ADDR", "")
        client_port = str(request.environ.get("REMOTE_PORT", ""))
        access_log.record_access(client_ip, client_port, binding.port)
        return Response(binding.text, status=200, mimetype="text/plain")

    return app
