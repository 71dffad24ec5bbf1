"""
Knowledge Base API Routes
"""
import logging

from flask import Blueprint, jsonify, request

from ...core.errors import GuideNotFoundError, QuestionNotFoundError
from .. import attach_component_service, get_component_service
from .service import KnowledgeBaseService

logger = logging.getLogger(__name__)

knowledge_base_bp = Blueprint('knowledge_base', __name__)


def _service():
    return get_component_service('knowledge_base')


@knowledge_base_bp.errorhandler(GuideNotFoundError)
def handle_missing_guide(e):
    logger.error(str(e))
    return jsonify({'error': str(e)}), 404


@knowledge_base_bp.route('/api/questions')
def api_list_questions():
    """List questions, optionally within one section"""
    section = request.args.get('section')
    questions = _service().list_questions(section=section)
    return jsonify({
        'count': len(questions),
        'questions': [q.to_dict(include_body=False) for q in questions]
    })


@knowledge_base_bp.route('/api/questions/<question_id>')
def api_get_question(question_id):
    try:
        question = _service().get_question(question_id)
    except QuestionNotFoundError as e:
        return jsonify({'error': str(e)}), 404
    return jsonify(question.to_dict())


@knowledge_base_bp.route('/api/questions/search')
def api_search_questions():
    term = request.args.get('q', '')
    if not term.strip():
        return jsonify({'error': "Query parameter 'q' is required"}), 400

    results = _service().search(term)
    return jsonify({
        'query': term,
        'count': len(results),
        'questions': [q.to_dict(include_body=False) for q in results]
    })


@knowledge_base_bp.route('/api/questions/validate')
def api_validate_guide():
    """Run document-level checks over the whole guide"""
    return jsonify(_service().validate())


@knowledge_base_bp.route('/api/questions/reload', methods=['POST'])
def api_reload_guide():
    count = _service().reload()
    return jsonify({'status': 'reloaded', 'question_count': count})


@knowledge_base_bp.route('/api/sections')
def api_sections():
    return jsonify(_service().sections())


@knowledge_base_bp.route('/api/scripts')
def api_scripts():
    """Embedded code blocks, optionally filtered by language tag"""
    language = request.args.get('language')
    return jsonify(_service().list_scripts(language=language))


def init_knowledge_base(app):
    """Initialize knowledge base component with Flask app"""
    attach_component_service(app, 'knowledge_base',
                             KnowledgeBaseService(app.config['GUIDE_PATH']))
    app.register_blueprint(knowledge_base_bp)
    logger.debug("Knowledge Base component initialized")
    return knowledge_base_bp
