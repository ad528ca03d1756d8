import argparse
import logging
import sys
from pathlib import Path

from selfassessment.config import COURSES_DIR
from selfassessment.engine import ConfigValidationError, check_config
from selfassessment.logging_setup import setup_console_logging
from selfassessment.utils import read_config_file

setup_console_logging()
log = logging.getLogger("selfassessment.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage SelfAssessment course configs")
    commands = parser.add_subparsers(dest="command", required=True)

    validate = commands.add_parser("validate", help="Validate course config files")
    validate.add_argument("files", type=Path, nargs="+", help="Course config JSON files")

    load = commands.add_parser("import", help="Validate and store a course config")
    load.add_argument("file", type=Path, help="Course config JSON file")
    load.add_argument("--course", required=True, help="Course name")
    load.add_argument("--language", required=True, help="Config language, e.g. en")
    load.add_argument("--icon", default=None, help="Course icon URI")

    load_dir = commands.add_parser(
        "import-dir", help="Import every <course>/<language>.json below a directory"
    )
    load_dir.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=COURSES_DIR,
        help="Courses directory",
    )
    return parser.parse_args(argv)


def validate_files(files: list[Path]) -> int:
    failures = 0
    for path in files:
        try:
            errors = check_config(read_config_file(path))
        except ConfigValidationError as exc:
            errors = exc.errors
        if errors:
            failures += 1
            print(f"{path}: invalid")
            for error in errors:
                print(f"  {error}")
        else:
            print(f"{path}: ok")
    return 1 if failures else 0


def import_files(entries: list[tuple[Path, str, str]], icon: str | None = None) -> int:
    from selfassessment.database import init_db, session_scope
    from selfassessment.services.course_service import import_course_config

    init_db()
    failures = 0
    with session_scope() as db:
        for path, course, language in entries:
            try:
                import_course_config(db, course, language, read_config_file(path), icon)
            except ConfigValidationError as exc:
                failures += 1
                log.error(f"{path}: rejected: {exc.errors}")
                continue
            print(f"Imported {course}/{language} from {path}")
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "validate":
        return validate_files(args.files)
    if args.command == "import":
        return import_files([(args.file, args.course, args.language)], args.icon)

    entries = [
        (path, path.parent.name, path.stem)
        for path in sorted(args.directory.glob("*/*.json"))
    ]
    if not entries:
        log.warning(f"No course configs found in {args.directory}")
    return import_files(entries)


if __name__ == "__main__":
    sys.exit(main())
