import argparse
import json
import sys
from typing import List, Optional

from .core.config import EngineSettings, engine_settings
from .core.logging_config import setup_logging
from .engine import DatingDNAEngine
from .errors import ContentConfigurationError, InputError, ValidationError


def _read_answers(path: str) -> dict:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        raise InputError(f"Answers file not found: {path}")
    except json.JSONDecodeError as e:
        raise InputError(f"Answers file {path} is not valid JSON: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Score a Dating DNA assessment and print the result as JSON.")
    parser.add_argument("answers", help="Path to a JSON object mapping question ids to answers.")
    parser.add_argument("--partner", help="Second answers file; produces a couple result.")
    parser.add_argument("--bank", default=None, help="Question bank id (full or snapshot).")
    parser.add_argument("--lenient", action="store_true", help="Skip malformed answers instead of failing.")
    parser.add_argument("--log-level", default=engine_settings.log_level, help="Logging level.")
    args = parser.parse_args(argv)

    setup_logging(args.log_level, stream=sys.stderr)
    settings = engine_settings
    if args.lenient:
        settings = EngineSettings(**{**engine_settings.model_dump(), "strict_input": False})

    try:
        engine = DatingDNAEngine(settings=settings)
        if args.partner:
            result = engine.assess_couple(_read_answers(args.answers), _read_answers(args.partner), bank_id=args.bank)
        else:
            result = engine.assess(_read_answers(args.answers), bank_id=args.bank)
    except InputError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print(f"Result failed validation: {e}", file=sys.stderr)
        return 1
    except ContentConfigurationError as e:
        print(f"Content configuration error: {e}", file=sys.stderr)
        return 1

    print(result.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
