from flask import Blueprint, current_app, jsonify, request

bp = Blueprint("catalog", __name__)


@bp.route("", methods=["GET"])
def list_items():
    """List all catalog items."""
    return jsonify(current_app.catalog.list())


@bp.route("/<int:item_id>", methods=["GET"])
def get_item(item_id: int):
    item = current_app.catalog.get(item_id)
    if not item:
        return jsonify({"error": "Catalog item not found"}), 404
    return jsonify(item)


@bp.route("", methods=["POST"])
def create_item():
    """Add an item. The store assigns the id."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    return jsonify(current_app.catalog.create(data)), 201


@bp.route("/<int:item_id>", methods=["PUT"])
def update_item(item_id: int):
    """Merge the request body into an existing item."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    item = current_app.catalog.update(item_id, data)
    if not item:
        return jsonify({"error": "Catalog item not found"}), 404
    return jsonify(item)


@bp.route("/<int:item_id>", methods=["DELETE"])
def delete_item(item_id: int):
    item = current_app.catalog.delete(item_id)
    if not item:
        return jsonify({"error": "Catalog item not found"}), 404
    return jsonify(item)
