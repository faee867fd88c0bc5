# app.py
from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest, HTTPException

from aggregation import create_aggregation, eligible_aggregation_sources, remove_aggregation
from catalog import catalog_dict
from config import Config
from layout_service import layout_for_template
from models import PageSize, Template
from paper import paper_catalog
from preview_service import build_preview
from template_service import (
    default_template, move_field, set_column_label, set_options, toggle_field
)


# -----------------------------
# Helpers
# -----------------------------
def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object.")
    return data


def _template_from(data: dict) -> Template:
    raw = data.get("template")
    if raw is None:
        return default_template()
    if not isinstance(raw, dict):
        raise ValueError("'template' must be an object.")
    return Template.from_dict(raw)


def _page_size_from(data: dict) -> PageSize:
    return PageSize.parse(data.get("paper_size") or Config.DEFAULT_PAPER_SIZE)


def _template_response(template: Template, page_size: PageSize, **extra):
    # Layout is recomputed on every template change so it is never stale
    body = {
        "template": template.to_dict(),
        "paper_size": page_size.value,
        "layout": layout_for_template(template, page_size).to_dict(),
        "eligible_aggregation_sources": [s.id for s in eligible_aggregation_sources(template)],
    }
    body.update(extra)
    return jsonify(body)


# -----------------------------
# App factory
# -----------------------------
def create_app():
    app = Flask(__name__)
    app.config.from_object(Config)
    app.logger.setLevel(Config.LOG_LEVEL)

    # -----------------------------
    # Error handlers (JSON everywhere)
    # -----------------------------
    @app.errorhandler(ValueError)
    def handle_value_error(exc):
        app.logger.warning("Rejected %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        if exc.code == 400:
            app.logger.warning("Rejected %s %s: %s", request.method, request.path, exc.description)
        return jsonify({"error": exc.description}), exc.code

    # -----------------------------
    # Catalog
    # -----------------------------
    @app.route("/api/catalog")
    def catalog():
        return jsonify({
            "fields": catalog_dict(),
            "paper_sizes": paper_catalog(),
            "font_size": {"min": Config.FONT_SIZE_MIN_PX, "max": Config.FONT_SIZE_MAX_PX},
        })

    @app.route("/api/template/default")
    def template_default():
        page_size = PageSize.parse(request.args.get("paper_size") or Config.DEFAULT_PAPER_SIZE)
        name = (request.args.get("name") or "").strip() or None
        return _template_response(default_template(name=name), page_size)

    # -----------------------------
    # Layout
    # -----------------------------
    @app.route("/api/layout", methods=["POST"])
    def layout():
        data = _payload()
        return _template_response(_template_from(data), _page_size_from(data))

    # -----------------------------
    # Template edits
    # -----------------------------
    @app.route("/api/template/toggle", methods=["POST"])
    def template_toggle():
        data = _payload()
        tpl = toggle_field(
            _template_from(data),
            str(data.get("section") or ""),
            str(data.get("field_id") or ""),
            subsection=data.get("subsection"),
        )
        return _template_response(tpl, _page_size_from(data))

    @app.route("/api/template/move", methods=["POST"])
    def template_move():
        data = _payload()
        tpl = move_field(
            _template_from(data),
            str(data.get("section") or ""),
            str(data.get("field_id") or ""),
            str(data.get("direction") or ""),
            subsection=data.get("subsection"),
        )
        return _template_response(tpl, _page_size_from(data))

    @app.route("/api/template/label", methods=["POST"])
    def template_label():
        data = _payload()
        tpl = set_column_label(
            _template_from(data),
            str(data.get("field_id") or ""),
            str(data.get("label") or ""),
        )
        return _template_response(tpl, _page_size_from(data))

    @app.route("/api/template/options", methods=["POST"])
    def template_options():
        data = _payload()
        options = data.get("options") or {}
        if not isinstance(options, dict):
            raise ValueError("'options' must be an object.")
        tpl = set_options(_template_from(data), **options)
        return _template_response(tpl, _page_size_from(data))

    # -----------------------------
    # Aggregations
    # -----------------------------
    @app.route("/api/aggregations", methods=["POST"])
    def aggregation_create():
        data = _payload()
        source_ids = data.get("source_field_ids") or []
        if not isinstance(source_ids, list):
            raise ValueError("'source_field_ids' must be a list.")
        tpl, agg = create_aggregation(
            _template_from(data),
            source_ids,
            str(data.get("label") or ""),
            data.get("mode") or "add",
        )
        return _template_response(tpl, _page_size_from(data), aggregation=agg.to_dict())

    @app.route("/api/aggregations/<aggregation_id>/delete", methods=["POST"])
    def aggregation_delete(aggregation_id: str):
        data = _payload()
        tpl = remove_aggregation(_template_from(data), aggregation_id)
        return _template_response(tpl, _page_size_from(data))

    # -----------------------------
    # Preview (renderer input)
    # -----------------------------
    @app.route("/api/preview", methods=["POST"])
    def preview():
        data = _payload()
        return jsonify(build_preview(_template_from(data), _page_size_from(data)))

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
