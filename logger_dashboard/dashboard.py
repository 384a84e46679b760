"""Flask dashboard for the log session controller."""

from flask import Flask, jsonify, render_template, request

from logger_dashboard.commands import (
    ClearCommand,
    InvalidCommand,
    SubmitCandidate,
    ToggleAutoGenerate,
)
from logger_dashboard.controller import InvalidCandidate, LogSessionController
from logger_dashboard.vocabulary import LOG_LEVELS, SERVICES


def _invalid(*errors: str):
    return jsonify({"status": "invalid", "errors": list(errors)}), 400


def _string_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def create_dashboard_app(controller: LogSessionController) -> Flask:
    """Flask application factory."""
    app = Flask(__name__)
    app.config["controller"] = controller

    @app.route("/")
    def index():
        return render_template("dashboard.html")

    @app.route("/health")
    def health():
        return jsonify(status="ok")

    @app.route("/api/vocabulary")
    def vocabulary():
        return jsonify({"services": list(SERVICES), "levels": list(LOG_LEVELS)})

    @app.route("/api/state")
    def state():
        return jsonify(controller.snapshot())

    @app.route("/api/logs", methods=["GET"])
    def list_logs():
        return jsonify([r.to_dict() for r in controller.visible_logs()])

    @app.route("/api/logs", methods=["POST"])
    def submit_log():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _invalid("Request body must be a JSON object")
        try:
            controller.submit_form(
                data.get("service"), data.get("level"), data.get("message"),
            )
        except InvalidCandidate as e:
            return _invalid(*e.errors)
        return jsonify({"status": "submitted"}), 202

    @app.route("/api/logs", methods=["DELETE"])
    def clear_logs():
        controller.clear_logs()
        return jsonify({"status": "cleared"})

    @app.route("/api/filters", methods=["PUT"])
    def update_filters():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _invalid("Request body must be a JSON object")

        errors = []
        for key in ("services", "levels"):
            if key in data and not _string_list(data[key]):
                errors.append(f"'{key}' must be a list of strings")
        if "query" in data and not isinstance(data["query"], str):
            errors.append("'query' must be a string")
        if errors:
            return _invalid(*errors)

        controller.replace_filters(
            services=data.get("services"),
            levels=data.get("levels"),
            query=data.get("query"),
        )
        return jsonify(controller.filters.to_dict())

    @app.route("/api/command", methods=["POST"])
    def run_command():
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("command"), str):
            return _invalid("'command' must be a string")

        command = controller.execute_command(data["command"])
        if isinstance(command, InvalidCommand):
            return _invalid(command.reason)
        if isinstance(command, ClearCommand):
            return jsonify({"status": "cleared"})
        if isinstance(command, ToggleAutoGenerate):
            return jsonify({"status": "toggled", "auto_generate": controller.auto_generating})
        if isinstance(command, SubmitCandidate):
            return jsonify({"status": "submitted"}), 202
        return _invalid("Unsupported command")

    @app.route("/api/auto-generate", methods=["POST"])
    def auto_generate():
        data = request.get_json(silent=True) or {}
        enabled = data.get("enabled") if isinstance(data, dict) else None
        if enabled is None:
            controller.toggle_auto_generate()
        elif isinstance(enabled, bool):
            if enabled:
                controller.start_auto_generate()
            else:
                controller.stop_auto_generate()
        else:
            return _invalid("'enabled' must be a boolean")
        return jsonify({"auto_generate": controller.auto_generating})

    @app.route("/api/notifications")
    def notifications():
        since = request.args.get("since", 0, type=int)
        return jsonify([n.to_dict() for n in controller.notifications.since(since)])

    return app


def run_dashboard(app: Flask, host: str, port: int):
    app.run(host=host, port=port, use_reloader=False, threaded=True)
