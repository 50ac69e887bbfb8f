from flask import Blueprint, jsonify

from riverdb.statistics import StatisticsService

bp = Blueprint("statistics", __name__)
statistics_service = StatisticsService()


@bp.route("/filter-options", methods=["GET"])
def filter_options():
    """Known factor names per category and all case names."""
    return jsonify(statistics_service.filter_options())


@bp.route("/statistics", methods=["GET"])
def statistics():
    """Factor usage counts per category and the total number of projects."""
    return jsonify(statistics_service.statistics())


@bp.route("/factors", methods=["GET"])
def factors():
    """Full factor records with usage counts."""
    return jsonify(statistics_service.factors_overview())


@bp.route("/footer-stats", methods=["GET"])
def footer_stats():
    return jsonify(statistics_service.footer_stats())
