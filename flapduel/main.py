from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/health')
def health():
    return 'OK', 200, {'Content-Type': 'text/plain'}


@main.route('/stats')
def stats():
    """Read-only snapshot of the waiting queue and live sessions."""
    coordinator = current_app.extensions['flapduel']
    return jsonify(coordinator.stats())
