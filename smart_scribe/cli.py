import argparse
import logging
import os
import sys

from smart_scribe.config import ConfigError, load_config
from smart_scribe.core.classifier import classify
from smart_scribe.core.interfaces import NoteNotFoundError, NoteStorage, Notifier, StorageError, TranscriptSource
from smart_scribe.core.notes import detect_note_category, share_text, summary_preview
from smart_scribe.core.pipeline import LiveAnalyzer, NoteFeed, NoteService
from smart_scribe.core.speech import SpeechError
from smart_scribe.core.summarizer import analyze
from smart_scribe.registry import build_adapter


logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "SS_LOG_LEVEL"


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise SystemExit(f"Invalid {ENV_LOG_LEVEL} value: {level}")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load(args):
    try:
        config = load_config(args.config)
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc
    os.makedirs(config.data_dir, exist_ok=True)
    return config


def _storage(config) -> NoteStorage:
    return build_adapter(config.storage.class_path, config.storage.settings, NoteStorage)


def _service(config) -> NoteService:
    notifier = build_adapter(config.notifier.class_path, config.notifier.settings, Notifier)
    return NoteService(_storage(config), notifier, min_live_chars=config.min_live_chars)


def _read_text(args) -> str:
    if getattr(args, "file", None):
        with open(args.file, "r", encoding="utf-8") as handle:
            return handle.read()
    if getattr(args, "text", None):
        return args.text
    return sys.stdin.read()


def _print_note(note, full: bool = False) -> None:
    print(f"[{note.id}] {note.title} ({note.category}, {note.word_count} words, updated {note.updated_at:%Y-%m-%d %H:%M})")
    if full:
        print()
        print(note.content)
        print()
        print(note.summary)
    else:
        print(summary_preview(note.summary))


def cmd_summarize(args) -> None:
    result = analyze(_read_text(args))
    if args.show_category and result.category is not None:
        print(f"Category: {result.category.value}")
    print(result.summary)


def cmd_classify(args) -> None:
    text = _read_text(args)
    print(f"Summary category: {classify(text).value}")
    print(f"Storage category: {detect_note_category(text).value}")


def cmd_capture(args) -> None:
    config = _load(args)
    capture = build_adapter(config.capture.class_path, config.capture.settings, TranscriptSource)
    if not hasattr(capture, "enqueue"):
        raise SystemExit("Capture adapter does not support enqueue().")
    if args.error:
        capture.enqueue(error=args.error, source="cli")
    else:
        if not args.text:
            raise SystemExit("Provide transcript text or --error.")
        capture.enqueue(text=args.text, source="cli")
    print("Captured.")


def cmd_run(args) -> None:
    config = _load(args)
    capture = build_adapter(config.capture.class_path, config.capture.settings, TranscriptSource)
    saved = _service(config).process_transcripts(capture)
    print(f"Processed {len(saved)} transcripts.")


def cmd_save(args) -> None:
    config = _load(args)
    note = _service(config).save(_read_text(args))
    if note is None:
        raise SystemExit(1)
    _print_note(note)


def cmd_list(args) -> None:
    config = _load(args)
    notes = []
    feed = NoteFeed(_storage(config), notes.extend)
    feed.set_query(category=args.category, search=args.search)
    feed.close()
    if not notes:
        print("No notes found." if (args.category or args.search) else "No notes yet.")
        return
    for note in notes:
        _print_note(note)


def cmd_categories(args) -> None:
    config = _load(args)
    for category in _storage(config).list_categories():
        print(category)


def cmd_show(args) -> None:
    config = _load(args)
    note = _storage(config).get_note(args.note_id)
    if note is None:
        raise SystemExit(f"Note id {args.note_id} not found.")
    _print_note(note, full=True)


def cmd_share(args) -> None:
    config = _load(args)
    note = _storage(config).get_note(args.note_id)
    if note is None:
        raise SystemExit(f"Note id {args.note_id} not found.")
    print(share_text(note))


def cmd_update(args) -> None:
    config = _load(args)
    if all(value is None for value in (args.content, args.title, args.category, args.summary)) and not args.resummarize:
        raise SystemExit("Provide --content, --title, --category, --summary or --resummarize.")
    if args.summary is not None and args.resummarize:
        raise SystemExit("Use either --summary or --resummarize.")
    try:
        note = _service(config).update(
            args.note_id,
            content=args.content,
            title=args.title,
            category=args.category,
            summary=args.summary,
            resummarize=args.resummarize,
        )
    except NoteNotFoundError as exc:
        raise SystemExit(str(exc)) from exc
    print(f"Updated note {note.id} ({note.title}).")


def cmd_delete(args) -> None:
    config = _load(args)
    try:
        _service(config).delete(args.note_id)
    except NoteNotFoundError as exc:
        raise SystemExit(str(exc)) from exc
    print(f"Deleted note {args.note_id}.")


def cmd_live(args) -> None:
    config = _load(args)
    analyzer = LiveAnalyzer(
        on_result=lambda summary: print(f"{summary}\n"),
        delay=config.live_delay_seconds if args.delay is None else args.delay,
        min_chars=config.min_live_chars,
    )
    text = ""
    try:
        for line in sys.stdin:
            text = f"{text} {line.strip()}".strip()
            analyzer.submit(text)
    finally:
        analyzer.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SmartScribe notes and summaries")
    parser.add_argument("--config", help="Path to config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    summarize_cmd = sub.add_parser("summarize", help="Summarize text without saving it")
    summarize_cmd.add_argument("text", nargs="?", help="Text to summarize (stdin when omitted)")
    summarize_cmd.add_argument("--file", help="Read text from a file")
    summarize_cmd.add_argument("--show-category", action="store_true", help="Print the detected category")
    summarize_cmd.set_defaults(func=cmd_summarize)

    classify_cmd = sub.add_parser("classify", help="Show summary and storage categories")
    classify_cmd.add_argument("text", nargs="?", help="Text to classify (stdin when omitted)")
    classify_cmd.add_argument("--file", help="Read text from a file")
    classify_cmd.set_defaults(func=cmd_classify)

    capture_cmd = sub.add_parser("capture", help="Queue a transcript or recognition error")
    capture_cmd.add_argument("text", nargs="?", help="Transcript text")
    capture_cmd.add_argument(
        "--error",
        choices=[error.value for error in SpeechError],
        help="Queue a recognition error instead of text",
    )
    capture_cmd.set_defaults(func=cmd_capture)

    run_cmd = sub.add_parser("run", help="Summarize and save queued transcripts")
    run_cmd.set_defaults(func=cmd_run)

    save_cmd = sub.add_parser("save", help="Summarize and save a note")
    save_cmd.add_argument("text", nargs="?", help="Note content (stdin when omitted)")
    save_cmd.add_argument("--file", help="Read content from a file")
    save_cmd.set_defaults(func=cmd_save)

    list_cmd = sub.add_parser("list", help="List saved notes")
    list_cmd.add_argument("--category", help="Only notes in this storage category")
    list_cmd.add_argument("--search", help="Substring to find in content or summary")
    list_cmd.set_defaults(func=cmd_list)

    categories_cmd = sub.add_parser("categories", help="List storage categories in use")
    categories_cmd.set_defaults(func=cmd_categories)

    show_cmd = sub.add_parser("show", help="Show a note with its summary")
    show_cmd.add_argument("note_id", type=int)
    show_cmd.set_defaults(func=cmd_show)

    update_cmd = sub.add_parser("update", help="Edit a saved note")
    update_cmd.add_argument("note_id", type=int)
    update_cmd.add_argument("--content", help="Replace the content")
    update_cmd.add_argument("--title", help="Replace the title")
    update_cmd.add_argument("--category", help="Replace the storage category")
    update_cmd.add_argument("--summary", help="Replace the summary text")
    update_cmd.add_argument("--resummarize", action="store_true", help="Regenerate the summary")
    update_cmd.set_defaults(func=cmd_update)

    share_cmd = sub.add_parser("share", help="Print a note as shareable plain text")
    share_cmd.add_argument("note_id", type=int)
    share_cmd.set_defaults(func=cmd_share)

    delete_cmd = sub.add_parser("delete", help="Delete a note")
    delete_cmd.add_argument("note_id", type=int)
    delete_cmd.set_defaults(func=cmd_delete)

    live_cmd = sub.add_parser("live", help="Summarize stdin as it grows, line by line")
    live_cmd.add_argument("--delay", type=float, help="Seconds to wait before analysing")
    live_cmd.set_defaults(func=cmd_live)

    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        args.func(args)
    except StorageError as exc:
        logger.debug("Storage failure", exc_info=True)
        raise SystemExit(f"Storage error: {exc}") from exc


if __name__ == "__main__":
    main()
