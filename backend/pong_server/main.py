from flask import Blueprint, current_app, jsonify
from pong_server.services.pong import get_registry

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the pong server!'})

@main.route('/health')
def health():
    return jsonify({'status': 'ok', 'rooms': len(get_registry(current_app))})
