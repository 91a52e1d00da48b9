"""
Feedback Forum Routes
"""
from flask import Blueprint, request, jsonify, current_app, g
from routes.auth import login_required
from services.forum_service import ForumService

forum_bp = Blueprint('forum', __name__)

@forum_bp.route('/forum/posts', methods=['POST'])
@login_required
def create_post():
    """Submit a bug report or feature request"""
    data = request.get_json(silent=True) or {}

    forum_service = ForumService(current_app.get_firebase_service())
    result = forum_service.create_post(data, g.owner['uid'], g.owner.get('email'))

    return jsonify(result.model_dump()), 201 if result.success else 400

@forum_bp.route('/forum/posts', methods=['GET'])
@login_required
def list_my_posts():
    """List the signed-in owner's posts"""
    forum_service = ForumService(current_app.get_firebase_service())
    return jsonify({'posts': forum_service.get_my_posts(g.owner['uid'])}), 200
