"""
DevOps Interview Handbook
Flask application plus command line entry point
"""
import argparse
import logging
import sys

from flask import Flask, jsonify
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .components import get_component_service
from .components.knowledge_base import init_knowledge_base, load_guide, validate_questions
from .components.metrics_exporter import create_poller, init_metrics_exporter
from .components.service_restarter import build_command, create_restarter, init_service_restarter
from .components.system_hardware import init_system_hardware
from .components.system_logs import init_system_logs
from .config import HandbookConfig
from .core import HandbookError, configure_logging
from .routes import main_bp

logger = logging.getLogger(__name__)

POLLER_COMPONENTS = ('metrics_exporter', 'service_restarter')


def _internal_error(e):
    original = getattr(e, 'original_exception', None) or e
    logger.error(f'Unhandled error: {original}')
    return jsonify({'error': str(original)}), 500


class HandbookApp:
    """Main handbook application class"""

    def __init__(self, config_overrides=None):
        self.app = None
        self.config_overrides = dict(config_overrides or {})

    def create_app(self):
        """Create and configure Flask application"""
        self.app = Flask(__name__)

        # Load configuration
        self.app.config.update(HandbookConfig.as_dict())
        self.app.config.update(self.config_overrides)

        # Initialize extensions
        Limiter(
            key_func=get_remote_address,
            app=self.app,
            default_limits=[self.app.config['RATELIMIT_DEFAULT']],
            storage_uri=self.app.config['RATELIMIT_STORAGE_URI']
        )

        # Initialize components
        init_knowledge_base(self.app)
        init_metrics_exporter(self.app)
        init_service_restarter(self.app)
        init_system_hardware(self.app)
        init_system_logs(self.app)

        self.app.register_blueprint(main_bp)
        self.app.register_error_handler(500, _internal_error)

        if self.app.config['START_POLLERS']:
            self.start_pollers()

        return self.app

    def _pollers(self):
        with self.app.app_context():
            return [get_component_service(name) for name in POLLER_COMPONENTS]

    def start_pollers(self):
        for poller in self._pollers():
            poller.start()

    def stop_pollers(self):
        for poller in self._pollers():
            poller.stop()

    def run(self):
        """Start the handbook application"""
        host = self.app.config['HOST']
        port = self.app.config['PORT']

        logger.info("DevOps Interview Handbook")
        logger.info(f"Starting on: http://{host}:{port}")
        logger.info(f"   - Questions: http://{host}:{port}/api/questions")
        logger.info(f"   - Metrics:   http://{host}:{port}/metrics")
        logger.info(f"   - Restarter: http://{host}:{port}/api/restarter/status")

        try:
            self.app.run(host=host, port=port, debug=False)
        finally:
            self.stop_pollers()


def _cmd_serve(args):
    overrides = {}
    if args.host:
        overrides['HOST'] = args.host
    if args.port:
        overrides['PORT'] = args.port
    if args.guide:
        overrides['GUIDE_PATH'] = args.guide
    if args.start_pollers:
        overrides['START_POLLERS'] = True

    handbook = HandbookApp(overrides)
    handbook.create_app()
    handbook.run()
    return 0


def _cmd_validate(args):
    path = args.guide or HandbookConfig.GUIDE_PATH
    questions = load_guide(path)
    issues = validate_questions(questions)

    print(f"{path}: {len(questions)} questions")
    for issue in issues:
        print(f"  [{issue.code}] {issue.question_id}: {issue.message}")

    if issues:
        print(f"{len(issues)} issue(s) found")
        return 1
    print("OK")
    return 0


def _cmd_list(args):
    for question in load_guide(args.guide or HandbookConfig.GUIDE_PATH):
        marker = f" ({len(question.scripts)} code)" if question.scripts else ''
        print(f"{question.id:<12} {question.title}{marker}")
    return 0


def _cmd_show(args):
    questions = load_guide(args.guide or HandbookConfig.GUIDE_PATH)
    for question in questions:
        if question.id == args.question_id:
            print(question.title)
            print('=' * len(question.title))
            if question.answer:
                print(question.answer)
            for script in question.scripts:
                print(f"\n--- {script.language or 'text'} ---")
                print(script.source)
            return 0

    print(f"Unknown question: {args.question_id}", file=sys.stderr)
    return 1


def _run_until_interrupted(poller):
    try:
        poller.run_forever()
    except KeyboardInterrupt:
        poller.stop()
    return 0


def _cmd_exporter(args):
    config = HandbookConfig.as_dict()
    if args.base_url:
        config['EXPORTER_BASE_URL'] = args.base_url
    if args.query:
        config['EXPORTER_QUERIES'] = args.query
    if args.interval:
        config['EXPORTER_INTERVAL'] = args.interval
    return _run_until_interrupted(create_poller(config))


def _cmd_restarter(args):
    config = HandbookConfig.as_dict()
    if args.metric:
        config['RESTARTER_METRIC'] = args.metric
    if args.threshold is not None:
        config['RESTARTER_THRESHOLD'] = args.threshold
    if args.interval:
        config['RESTARTER_INTERVAL'] = args.interval
    if args.service:
        config['RESTARTER_SERVICE'] = args.service
    if args.command:
        config['RESTARTER_COMMAND'] = args.command
    if args.dry_run:
        config['RESTARTER_DRY_RUN'] = True
    if args.cooldown is not None:
        config['RESTARTER_COOLDOWN'] = args.cooldown

    # Validate the command before entering the loop
    build_command(config['RESTARTER_COMMAND'], config['RESTARTER_SERVICE'])
    return _run_until_interrupted(create_restarter(config))


def build_parser():
    parser = argparse.ArgumentParser(
        prog='devops-handbook',
        description='DevOps interview handbook, metrics poller and threshold restarter'
    )
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    sub = parser.add_subparsers(dest='command_name')

    serve = sub.add_parser('serve', help='Run the HTTP API (default)')
    serve.add_argument('--host')
    serve.add_argument('--port', type=int)
    serve.add_argument('--guide', help='Path to the markdown guide')
    serve.add_argument('--start-pollers', action='store_true',
                       help='Run the metrics poller and restarter in the background')
    serve.set_defaults(func=_cmd_serve)

    validate = sub.add_parser('validate', help='Check the guide for empty answers and other issues')
    validate.add_argument('guide', nargs='?')
    validate.set_defaults(func=_cmd_validate)

    list_cmd = sub.add_parser('list', help='List question ids and titles')
    list_cmd.add_argument('--guide')
    list_cmd.set_defaults(func=_cmd_list)

    show = sub.add_parser('show', help='Print one question and its answer')
    show.add_argument('question_id')
    show.add_argument('--guide')
    show.set_defaults(func=_cmd_show)

    exporter = sub.add_parser('exporter', help='Run the metrics poller in the foreground')
    exporter.add_argument('--base-url')
    exporter.add_argument('--query', action='append', help='Query expression (repeatable)')
    exporter.add_argument('--interval', type=float)
    exporter.set_defaults(func=_cmd_exporter)

    restarter = sub.add_parser('restarter', help='Run the threshold restarter in the foreground')
    restarter.add_argument('--metric', choices=['cpu', 'memory', 'disk', 'swap'])
    restarter.add_argument('--threshold', type=float)
    restarter.add_argument('--interval', type=float)
    restarter.add_argument('--service')
    restarter.add_argument('--command', dest='command', help='Full restart command line')
    restarter.add_argument('--dry-run', action='store_true')
    restarter.add_argument('--cooldown', type=float)
    restarter.set_defaults(func=_cmd_restarter)

    return parser


def main(argv=None):
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, HandbookConfig.MAX_LOG_ENTRIES)

    if args.command_name is None:
        argv = sys.argv[1:] if argv is None else list(argv)
        args = parser.parse_args(argv + ['serve'])

    try:
        return args.func(args)
    except (HandbookError, ValueError) as e:
        logger.error(str(e))
        return 2


if __name__ == '__main__':
    sys.exit(main())
