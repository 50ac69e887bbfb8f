from flask import Blueprint, jsonify, request

from riverdb.errors import ValidationError, parse_float
from riverdb.factor.categories import CATEGORIES
from riverdb.project import ProjectFilter, ProjectService

bp = Blueprint("projects", __name__)
project_service = ProjectService()

NEAR_FIELDS = ("id", "case", "longitude", "latitude", "distance_meters", "issues", "ideas")


@bp.route("", methods=["GET"])
def list_projects():
    """List projects matching the optional query-string filters."""
    try:
        criteria = ProjectFilter.from_args(request.args)
    except ValidationError as e:
        return jsonify(e.to_dict()), 400
    return jsonify(project_service.search(criteria))


@bp.route("/<int:project_id>", methods=["GET"])
def get_project(project_id: int):
    """Get a fully expanded project by ID."""
    project = project_service.get(project_id)
    if not project:
        return jsonify({"error": "Project not found"}), 404
    return jsonify(project)


@bp.route("/near/<lat>/<lng>", methods=["GET"])
def projects_near(lat: str, lng: str):
    """Projects within ?radius= km of a point, nearest first."""
    try:
        latitude = parse_float("latitude", lat)
        longitude = parse_float("longitude", lng)
        radius = request.args.get("radius", "").strip()
        radius_km = parse_float("radius", radius) if radius else None
        projects = project_service.near(latitude, longitude, radius_km)
    except ValidationError as e:
        return jsonify(e.to_dict()), 400

    return jsonify([{field: project[field] for field in NEAR_FIELDS} for project in projects])


@bp.route("", methods=["POST"])
def create_project():
    """Create a new project from factor names."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        created = project_service.create(
            case_name=data.get("case_name"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            factor_names={c.key: data.get(c.create_param) for c in CATEGORIES},
        )
    except ValidationError as e:
        return jsonify(e.to_dict()), 400

    return jsonify(created), 201

