"""Minimal protected endpoints, used when no upstream app is supplied."""

from flask import Blueprint, jsonify, current_app

blueprint = Blueprint('tokenauth', __name__, url_prefix='')


@blueprint.route('/status', methods=['GET'])
def status():
    """Reachable only through the gate."""
    return jsonify({'status': 'ok',
                    'gate': current_app.config['TOKENAUTH_NAME']}), 200
