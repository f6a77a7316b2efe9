from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from deckscan.core.errors import OpenError
from deckscan.core.extract import ImageStore, extract_slides, make_first_short_title
from deckscan.core.logging_config import get_logger, setup_logging
from deckscan.core.settings import Settings, get_settings
from deckscan.core.validate.schema_validate import SCHEMA_PATH, validate_extraction, validate_json_file

logger = get_logger("deckscan.cli")


def _print_errors(errs: list[str]) -> None:
    for m in errs[:30]:
        print(f"  - {m}")
    if len(errs) > 30:
        print(f"  ... ({len(errs)} errors)")


def _load_settings() -> Optional[Settings]:
    try:
        return get_settings()
    except ValidationError as e:
        print("[NG] invalid DECKSCAN_* settings")
        print(f"      detail: {e}")
        return None


def _remove_stale(out_path: Path) -> None:
    try:
        if out_path.exists():
            out_path.unlink()
    except OSError:
        pass


def cmd_paths(_: argparse.Namespace) -> int:
    settings = _load_settings()
    if settings is None:
        return 2
    print(f"schema.slides: {SCHEMA_PATH}")
    print(f"settings.image_dir: {settings.IMAGE_DIR}")
    print(f"settings.image_naming: {settings.IMAGE_NAMING}")
    print(f"settings.image_prefix: {settings.IMAGE_PREFIX!r}")
    print(f"settings.title_max_length: {settings.TITLE_MAX_LENGTH}")
    print(f"settings.log_level: {settings.LOG_LEVEL}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    inst = Path(args.instance).resolve()
    errs = validate_json_file(inst)
    if not errs:
        print(f"[OK] {inst.as_posix()}")
        return 0
    if errs[0].startswith("[ERR]"):
        print(f"[NG] {errs[0]}")
        return 2
    print(f"[NG] {inst.as_posix()}")
    _print_errors(errs)
    return 2


def cmd_extract(args: argparse.Namespace) -> int:
    settings = _load_settings()
    if settings is None:
        return 2
    setup_logging(args.log_level or settings.LOG_LEVEL, settings.LOG_FORMAT)

    in_path = Path(args.input).resolve()
    out_path = Path(args.out).resolve()

    if in_path.suffix.lower() != ".pptx":
        print(f"[NG] unsupported input type: {in_path.suffix} (use .pptx)")
        return 2

    threshold = args.title_max if args.title_max is not None else settings.TITLE_MAX_LENGTH
    try:
        classifier = make_first_short_title(threshold)
    except ValueError as e:
        print(f"[NG] {e}")
        return 2

    store = None
    if not args.no_images_on_disk:
        image_dir = Path(args.images) if args.images else settings.IMAGE_DIR
        try:
            store = ImageStore(
                image_dir.resolve(),
                naming=args.naming or settings.IMAGE_NAMING,
                prefix=args.prefix if args.prefix is not None else settings.IMAGE_PREFIX,
            )
        except ValueError as e:
            print(f"[NG] {e}")
            return 2

    try:
        result = extract_slides(in_path, classifier=classifier, store=store)
    except OpenError as e:
        # Do not leave stale output behind.
        _remove_stale(out_path)
        logger.error("Extraction failed | file=%s error=%s", in_path, e.reason)
        print("[NG] extract failed")
        print(f"      detail: {e}")
        return 2

    data = result.to_dict()
    errs = validate_extraction(data)
    if errs:
        _remove_stale(out_path)
        print("[NG] extraction does not conform to schema")
        _print_errors(errs)
        return 2

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    if result.degraded:
        print(f"[OK] extracted with {len(result.issues)} skipped shape(s): {out_path}")
    else:
        print(f"[OK] extracted: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deckscan")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_paths = sub.add_parser("paths", help="show schema location and effective settings")
    p_paths.set_defaults(func=cmd_paths)

    p_val = sub.add_parser("validate", help="validate an extraction json against the slides schema")
    p_val.add_argument("instance", help="path to extraction json")
    p_val.set_defaults(func=cmd_validate)

    p_ext = sub.add_parser("extract", help="extract slides (title/paragraphs/images) into json")
    p_ext.add_argument("input", help="path to input .pptx")
    p_ext.add_argument("--out", required=True, help="output json path")
    p_ext.add_argument("--images", required=False, help="directory for extracted images (default: DECKSCAN_IMAGE_DIR)")
    p_ext.add_argument("--naming", choices=["basename", "sha256"], help="image file naming policy")
    p_ext.add_argument("--prefix", required=False, help="prefix for every image file name")
    p_ext.add_argument("--title-max", type=int, dest="title_max", help="title length threshold in characters")
    p_ext.add_argument("--no-images-on-disk", action="store_true", help="keep images in memory only")
    p_ext.add_argument("--log-level", dest="log_level", help="override DECKSCAN_LOG_LEVEL")
    p_ext.set_defaults(func=cmd_extract)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
